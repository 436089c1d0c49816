"""
Platform helpers for devrefresh.

Keeps ``sys.platform`` and PATH lookups in one place so updaters can be
tested by patching this module.
"""

import shutil
import sys
from typing import Iterable, List, Optional

# Tools without which a run is refused, keyed by the skip token that
# disables their category.
CORE_COMMANDS = {
    "softwareupdate": "macos",
    "brew": "brew",
    "conda": "conda",
}


def is_macos() -> bool:
    """Return True when running on macOS."""
    return sys.platform == "darwin"


def which(command: str) -> Optional[str]:
    """Return the full path of *command* on PATH, or None."""
    return shutil.which(command)


def command_exists(command: str) -> bool:
    return which(command) is not None


def missing_core_commands(skip: Iterable[str] = ()) -> List[str]:
    """Return the core tools that are absent, ignoring skipped categories."""
    skipped = set(skip)
    return [
        cmd
        for cmd, token in CORE_COMMANDS.items()
        if token not in skipped and not command_exists(cmd)
    ]
