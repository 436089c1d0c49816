"""
Oh My Zsh updater.
"""

import logging
from typing import List

from devrefresh_py.models import Category, CategoryResult, Status, UpdateRecord
from devrefresh_py.parsers import omz_is_current
from devrefresh_py.updaters import BaseUpdater, UpdateContext

logger = logging.getLogger(__name__)

OMZ_UPDATE_SCRIPT = 'source "$ZSH/oh-my-zsh.sh" && omz update'


class OhMyZshUpdater(BaseUpdater):
    """Runs the Oh My Zsh self-updater.

    ``omz`` is a shell function, so it is called through a zsh that sources
    the framework first.
    """

    category = Category.OH_MY_ZSH

    def is_installed(self, ctx: UpdateContext) -> bool:
        omz_dir = ctx.config.oh_my_zsh_dir
        return omz_dir.is_dir() and (omz_dir / "oh-my-zsh.sh").is_file()

    def check(self, ctx: UpdateContext) -> List[CategoryResult]:
        omz_dir = ctx.config.oh_my_zsh_dir
        result = ctx.runner.run(
            ["zsh", "-c", OMZ_UPDATE_SCRIPT],
            env={"ZSH": str(omz_dir)},
        )
        if ctx.dry_run or omz_is_current(result.output):
            return [self.result(Status.NO_UPDATES)]
        if not result.ok:
            logger.warning(f"omz update exited with {result.exit_code}")
            return [
                self.result(
                    Status.WARNING,
                    detail=f"omz update failed (exit code {result.exit_code})",
                )
            ]
        return [
            self.result(
                Status.UPDATED, [UpdateRecord("oh-my-zsh")], detail="Updated to latest"
            )
        ]
