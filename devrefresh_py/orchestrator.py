"""
Sequential driver for a devrefresh run.

Runs every updater in a fixed order under its section header, reports each
result as soon as it is known, and folds the results into a ``RunSummary``.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from devrefresh_py.errors import MissingCoreDependency
from devrefresh_py.models import RunSummary
from devrefresh_py.platform import missing_core_commands
from devrefresh_py.report import Reporter
from devrefresh_py.updaters import BaseUpdater, UpdateContext
from devrefresh_py.updaters.brew import HomebrewUpdater
from devrefresh_py.updaters.conda import CondaUpdater
from devrefresh_py.updaters.macos import MacOSUpdater
from devrefresh_py.updaters.mas import AppStoreUpdater
from devrefresh_py.updaters.npm import NpmGlobalUpdater
from devrefresh_py.updaters.nvm import NVMUpdater
from devrefresh_py.updaters.uv import UVUpdater
from devrefresh_py.updaters.zsh import OhMyZshUpdater

logger = logging.getLogger("devrefresh.orchestrator")

Section = Tuple[str, Sequence[BaseUpdater]]


def default_sections() -> List[Section]:
    return [
        ("🖥️  System", [MacOSUpdater()]),
        ("🛠️  Development Tools", [OhMyZshUpdater(), HomebrewUpdater()]),
        (
            "🐍 Languages & Runtimes",
            [CondaUpdater(), UVUpdater(), NVMUpdater(), NpmGlobalUpdater()],
        ),
        ("📱 Applications", [AppStoreUpdater()]),
    ]


def check_required_commands(ctx: UpdateContext) -> None:
    """Raise ``MissingCoreDependency`` if a core tool for a running category is absent."""
    logger.debug("Checking required tools...")
    missing = missing_core_commands(ctx.skip)
    if missing:
        raise MissingCoreDependency(missing)


def run_updates(
    ctx: UpdateContext,
    reporter: Reporter,
    sections: Optional[List[Section]] = None,
) -> RunSummary:
    """Run every updater in order and return the folded summary."""
    summary = RunSummary()
    for title, updaters in sections if sections is not None else default_sections():
        reporter.section(title)
        for updater in updaters:
            logger.debug(f"Running {updater.category.label} updater")
            results = updater.run(ctx)
            for result in results:
                reporter.show_result(result)
            summary.add(results)
    summary.finish()
    return summary
