"""
Global npm package updater.
"""

import logging
from typing import List

from devrefresh_py.models import Category, CategoryResult, Status, UpdateRecord
from devrefresh_py.parsers import npm_install_changed
from devrefresh_py.updaters import BaseUpdater, UpdateContext

logger = logging.getLogger(__name__)


class NpmGlobalUpdater(BaseUpdater):
    """Installs the latest release of each configured global npm package."""

    category = Category.NPM
    binary = "npm"

    def check(self, ctx: UpdateContext) -> List[CategoryResult]:
        records: List[UpdateRecord] = []
        for package in ctx.config.npm_packages:
            result = ctx.runner.run(["npm", "install", "-g", f"{package}@latest"])
            if npm_install_changed(result.output):
                records.append(UpdateRecord(package))
            elif not result.ok:
                logger.warning(f"npm install -g {package}@latest failed")

        if not records:
            return [self.result(Status.NO_UPDATES)]
        return [
            self.result(
                Status.UPDATED, records, detail=f"{len(records)} packages updated"
            )
        ]
