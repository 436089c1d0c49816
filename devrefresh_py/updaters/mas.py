"""
Mac App Store updater, driven by ``mas``.
"""

from typing import List

from devrefresh_py.models import Category, CategoryResult, Status
from devrefresh_py.parsers import parse_mas_upgrades
from devrefresh_py.updaters import BaseUpdater, UpdateContext


class AppStoreUpdater(BaseUpdater):
    """Upgrades Mac App Store apps with ``mas``."""

    category = Category.APPSTORE
    binary = "mas"

    def check(self, ctx: UpdateContext) -> List[CategoryResult]:
        records = parse_mas_upgrades(ctx.runner.run(["mas", "upgrade"]).output)
        if not records:
            return [self.result(Status.NO_UPDATES)]
        return [
            self.result(Status.UPDATED, records, detail=f"{len(records)} apps updated")
        ]
