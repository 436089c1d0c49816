"""
Homebrew formula and cask updater.
"""

import logging
from typing import List

from devrefresh_py.models import Category, CategoryResult, Status
from devrefresh_py.parsers import (
    brew_doctor_ok,
    parse_brew_upgrades,
    parse_cask_upgrades,
)
from devrefresh_py.updaters import BaseUpdater, UpdateContext

logger = logging.getLogger(__name__)


class HomebrewUpdater(BaseUpdater):
    """Upgrades Homebrew formulae and casks.

    Formulae and casks are reported as separate results so the summary can
    count them as two categories.
    """

    category = Category.BREW
    binary = "brew"

    def check(self, ctx: UpdateContext) -> List[CategoryResult]:
        runner = ctx.runner
        runner.run(["brew", "update", "--force"])

        formulae = parse_brew_upgrades(runner.run(["brew", "upgrade"]).output)
        casks = parse_cask_upgrades(
            runner.run(["brew", "upgrade", "--cask", "--greedy"]).output
        )
        runner.run(["brew", "cleanup"], capture=False)

        results: List[CategoryResult] = []
        if not formulae and not casks:
            results.append(self.result(Status.NO_UPDATES))
        if formulae:
            results.append(
                self.result(
                    Status.UPDATED,
                    formulae,
                    detail=f"{len(formulae)} packages updated",
                )
            )
        if casks:
            results.append(
                self.result(
                    Status.UPDATED,
                    casks,
                    detail=f"{len(casks)} apps updated",
                    category=Category.BREW_CASK,
                )
            )

        if ctx.verbose and not ctx.dry_run:
            doctor = runner.run(["brew", "doctor"])
            if not brew_doctor_ok(doctor.output):
                results.append(
                    self.result(
                        Status.WARNING,
                        detail="Doctor found issues (check with: brew doctor)",
                    )
                )
        return results
