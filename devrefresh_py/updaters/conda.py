"""
Conda updater for the base environment.
"""

from typing import List

from devrefresh_py.models import Category, CategoryResult, Status
from devrefresh_py.parsers import parse_conda_updates
from devrefresh_py.updaters import BaseUpdater, UpdateContext


class CondaUpdater(BaseUpdater):
    """Updates conda itself, then every package in the active environment."""

    category = Category.CONDA
    binary = "conda"

    def check(self, ctx: UpdateContext) -> List[CategoryResult]:
        ctx.runner.run(
            ["conda", "update", "-n", "base", "-c", "conda-forge", "conda", "--yes"]
        )
        output = ctx.runner.run(["conda", "update", "--all", "--yes"]).output
        records = parse_conda_updates(output)
        if not records:
            return [self.result(Status.NO_UPDATES)]
        return [
            self.result(
                Status.UPDATED, records, detail=f"{len(records)} packages updated"
            )
        ]
