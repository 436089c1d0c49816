"""
macOS system update check.
"""

import logging
from typing import List

from devrefresh_py.errors import ManualActionRequired
from devrefresh_py.models import Category, CategoryResult, Status
from devrefresh_py.parsers import macos_is_current
from devrefresh_py.updaters import BaseUpdater, UpdateContext

logger = logging.getLogger(__name__)


class MacOSUpdater(BaseUpdater):
    """Checks for system software updates. Never installs them."""

    category = Category.MACOS
    binary = "softwareupdate"

    def check(self, ctx: UpdateContext) -> List[CategoryResult]:
        result = ctx.runner.run(["softwareupdate", "-l"])
        if ctx.dry_run or macos_is_current(result.output):
            return [self.result(Status.NO_UPDATES)]

        logger.debug("softwareupdate reported pending system updates")
        raise ManualActionRequired(
            "System updates available - install manually",
            hint=None if ctx.verbose else "Run: sudo softwareupdate -i -a",
        )
