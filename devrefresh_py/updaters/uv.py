"""
Self-update of the uv package manager.
"""

from typing import List

from devrefresh_py.models import Category, CategoryResult, Status, UpdateRecord
from devrefresh_py.parsers import parse_uv_self_update, uv_is_current
from devrefresh_py.updaters import BaseUpdater, UpdateContext


class UVUpdater(BaseUpdater):
    """Runs ``uv self update``; fails softly when uv came from elsewhere."""

    category = Category.UV
    binary = "uv"

    def check(self, ctx: UpdateContext) -> List[CategoryResult]:
        result = ctx.runner.run(["uv", "self", "update"])
        output = result.output
        if ctx.dry_run or uv_is_current(output):
            return [self.result(Status.NO_UPDATES)]

        record = parse_uv_self_update(output)
        if record is not None:
            return [
                self.result(
                    Status.UPDATED,
                    [record],
                    detail=f"from v{record.old_version} to v{record.new_version}",
                )
            ]
        if not result.ok:
            # Typically uv was installed by another package manager.
            return [
                self.result(
                    Status.WARNING,
                    detail=f"Self-update failed (exit code {result.exit_code})",
                )
            ]
        return [
            self.result(Status.UPDATED, [UpdateRecord("uv")], detail="Updated to latest")
        ]
