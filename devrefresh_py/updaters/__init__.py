"""
Category updaters for devrefresh.

Every updater goes through the same steps: honour a user skip, check that
its tool is installed, then run the tool and turn its output into one or more
``CategoryResult`` values. Failures inside a category never escape it.
"""

import abc
import dataclasses
import logging
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional

from devrefresh_py.config import DevrefreshConfig
from devrefresh_py.errors import (
    ManualActionRequired,
    NotInstalled,
    PostUpdateMismatch,
    Skipped,
    UpdateCheckFailed,
)
from devrefresh_py.models import Category, CategoryResult, Status, UpdateRecord
from devrefresh_py.platform import command_exists
from devrefresh_py.runner import CommandRunner

logger = logging.getLogger("devrefresh.updaters")

PREVIEW_DETAIL = "Preview only - nothing executed"


@dataclass
class UpdateContext:
    """Everything an updater needs for one run."""

    runner: CommandRunner
    config: DevrefreshConfig = field(default_factory=DevrefreshConfig)
    skip: FrozenSet[str] = frozenset()
    dry_run: bool = False
    verbose: bool = False

    def should_skip(self, token: str) -> bool:
        return token in self.skip


class BaseUpdater(abc.ABC):
    """Base class for category updaters."""

    category: Category
    # Binary that must be on PATH, if any.
    binary: Optional[str] = None

    @property
    def skip_token(self) -> str:
        return self.category.skip_token

    def is_installed(self, ctx: UpdateContext) -> bool:
        return self.binary is None or command_exists(self.binary)

    @abc.abstractmethod
    def check(self, ctx: UpdateContext) -> List[CategoryResult]:
        """Run the tool and return the category's results."""
        pass

    def result(
        self,
        status: Status,
        records: Iterable[UpdateRecord] = (),
        detail: Optional[str] = None,
        hint: Optional[str] = None,
        category: Optional[Category] = None,
    ) -> CategoryResult:
        return CategoryResult(
            category=category or self.category,
            status=status,
            records=tuple(records),
            detail=detail,
            hint=hint,
        )

    def run(self, ctx: UpdateContext) -> List[CategoryResult]:
        """Skip check, install check, then ``check``; always returns results."""
        try:
            if ctx.should_skip(self.skip_token):
                raise Skipped(self.skip_token)
            if not self.is_installed(ctx):
                raise NotInstalled(self.binary or self.category.key)
            results = self.check(ctx)
        except Skipped:
            logger.debug(f"{self.category.label}: skipped by request")
            return [self.result(Status.SKIPPED)]
        except NotInstalled as e:
            logger.debug(f"{self.category.label}: not installed ({e})")
            return [self.result(Status.NOT_INSTALLED)]
        except ManualActionRequired as e:
            return [self.result(Status.WARNING, detail=str(e), hint=e.hint or None)]
        except (UpdateCheckFailed, PostUpdateMismatch) as e:
            logger.debug(f"{self.category.label}: {e}")
            return [self.result(Status.ERROR, detail=str(e))]
        except OSError as e:
            logger.error(f"{self.category.label}: {e}")
            return [self.result(Status.ERROR, detail=str(e))]

        if ctx.dry_run:
            results = [
                dataclasses.replace(r, detail=PREVIEW_DETAIL)
                if r.status is Status.NO_UPDATES and not r.detail
                else r
                for r in results
            ]
        return results
