"""
Exceptions used by devrefresh.

Per-category failures are raised inside an updater and turned into a
``CategoryResult`` by ``BaseUpdater.run``. Only ``MissingCoreDependency``
ends the whole run.
"""

from typing import List


class DevrefreshError(Exception):
    """Base class for devrefresh errors."""


class NotInstalled(DevrefreshError):
    """The tool a category needs is not present."""


class Skipped(DevrefreshError):
    """The user asked for the category to be skipped."""


class UpdateCheckFailed(DevrefreshError):
    """A remote version lookup failed."""


class PostUpdateMismatch(DevrefreshError):
    """The installed version after an update is not the expected one."""

    def __init__(self, installed: str, expected: str):
        self.installed = installed
        self.expected = expected
        super().__init__(
            f"Update failed (current: v{installed}, expected: v{expected})"
        )


class ManualActionRequired(DevrefreshError):
    """Updates exist that the user has to apply by hand."""

    def __init__(self, message: str, hint: str = ""):
        self.hint = hint
        super().__init__(message)


class MissingCoreDependency(DevrefreshError):
    """One or more required tools are missing; the run cannot start."""

    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required commands: {' '.join(self.missing)}")
