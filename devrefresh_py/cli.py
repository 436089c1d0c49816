"""
Command-line interface for devrefresh.

This module provides the ``devrefresh`` entry point: it parses flags, loads
the configuration and hands over to the orchestrator.
"""

import logging
import os
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import FrozenSet, Iterable, Iterator, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from devrefresh_py import __version__
from devrefresh_py.apps import scan_applications
from devrefresh_py.config import DevrefreshConfig
from devrefresh_py.errors import MissingCoreDependency
from devrefresh_py.models import SKIP_TOKENS
from devrefresh_py.orchestrator import check_required_commands, run_updates
from devrefresh_py.platform import is_macos
from devrefresh_py.report import Reporter
from devrefresh_py.runner import CommandRunner, RunLog
from devrefresh_py.updaters import UpdateContext

# Set up the console and logger
console = Console()
logging.basicConfig(
    level=logging.INFO,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(console=console, rich_tracebacks=True)],
)
logger = logging.getLogger("devrefresh")

# Set while a run is in progress. Only guards against a nested run from the
# same process environment; two separate shells can still run concurrently.
GUARD_ENV = "DEVREFRESH_ALREADY_RUN"

app = typer.Typer(
    help="Update every package manager on a developer workstation and "
    "report what changed.",
    add_completion=False,
)


def parse_skip(values: Iterable[str]) -> FrozenSet[str]:
    """
    Turn comma-separated skip lists into a set of tokens.

    Order and repetition do not matter.

    Raises:
        ValueError: an unknown token was given.
    """
    tokens = {
        token.strip().lower()
        for value in values
        for token in value.split(",")
        if token.strip()
    }
    unknown = sorted(tokens - set(SKIP_TOKENS))
    if unknown:
        raise ValueError(
            f"Unknown skip category: {', '.join(unknown)}. "
            f"Available: {', '.join(SKIP_TOKENS)}"
        )
    return frozenset(tokens)


@contextmanager
def session_guard() -> Iterator[bool]:
    """Yield False if a run is already active in this environment."""
    if os.environ.get(GUARD_ENV):
        yield False
        return
    os.environ[GUARD_ENV] = "1"
    try:
        yield True
    finally:
        os.environ.pop(GUARD_ENV, None)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"devrefresh version: {__version__}")
        raise typer.Exit()


@app.command()
def main(
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Preview updates without making changes."
    ),
    audit: bool = typer.Option(
        False,
        "--audit",
        "-a",
        help="Show what devrefresh covers vs. other update mechanisms.",
    ),
    list_unmanaged: bool = typer.Option(
        False,
        "--list-unmanaged",
        "-l",
        help="List apps not managed by devrefresh, by category.",
    ),
    skip: Optional[str] = typer.Option(
        None,
        "--skip",
        "-s",
        help="Skip categories (comma-separated): " + ", ".join(SKIP_TOKENS),
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show detailed output (adds dates with --list-unmanaged).",
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to the config file (default: ~/.config/devrefresh/config.yaml).",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the application version and exit.",
    ),
) -> None:
    """
    Refresh macOS, Oh My Zsh, Homebrew, Conda, UV, NVM, npm and App Store
    software, then print a summary of what changed.
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")

    config = DevrefreshConfig.load(config_path)

    try:
        skip_tokens = parse_skip(config.skip + ([skip] if skip else []))
    except ValueError as e:
        logger.error(str(e))
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    reporter = Reporter(console=console, verbose=verbose)

    if audit:
        reporter.audit()
        raise typer.Exit()

    if list_unmanaged:
        grouped = scan_applications(
            config.applications_dir,
            verbose=verbose,
            extra_managed=config.extra_managed_apps,
        )
        reporter.unmanaged_apps(grouped)
        raise typer.Exit()

    with session_guard() as first_run:
        if not first_run:
            reporter.already_running()
            raise typer.Exit()
        _run(config, reporter, skip_tokens, dry_run, verbose)


def _run(
    config: DevrefreshConfig,
    reporter: Reporter,
    skip_tokens: FrozenSet[str],
    dry_run: bool,
    verbose: bool,
) -> None:
    if not is_macos():
        logger.warning("Not running on macOS; most categories will be unavailable.")

    ordered_skip = [t for t in SKIP_TOKENS if t in skip_tokens]
    reporter.banner(dry_run, ordered_skip)

    run_log = RunLog(config.log_file)
    run_log.write_header(
        datetime.now().strftime("%Y-%m-%d %H:%M:%S"), dry_run, ordered_skip
    )

    runner = CommandRunner(run_log, dry_run=dry_run, verbose=verbose, console=console)
    ctx = UpdateContext(
        runner=runner,
        config=config,
        skip=skip_tokens,
        dry_run=dry_run,
        verbose=verbose,
    )

    try:
        check_required_commands(ctx)
    except MissingCoreDependency as e:
        logger.error(f"ERROR: {e}")
        run_log.append(f"ERROR: {e}")
        raise typer.Exit(1) from e

    summary = run_updates(ctx, reporter)
    reporter.final_summary(summary)
    logger.debug(f"All operations are logged to: {config.log_file}")


if __name__ == "__main__":
    app()
