"""
Timestamped backups taken before devrefresh mutates something in place.
"""

import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional

logger = logging.getLogger("devrefresh.backup")


def backup_stamp(now: Optional[datetime] = None) -> str:
    """Return the ``YYYYmmddHHMMSS`` suffix used for backup names."""
    return (now or datetime.now()).strftime("%Y%m%d%H%M%S")


def backup_directory(path: Path, now: Optional[datetime] = None) -> Path:
    """Copy *path* to a sibling ``<name>_backup_<stamp>`` directory."""
    target = path.with_name(f"{path.name}_backup_{backup_stamp(now)}")
    logger.debug(f"Creating backup at {target}...")
    shutil.copytree(path, target, symlinks=True)
    return target


def backup_file(path: Path, now: Optional[datetime] = None) -> Path:
    """Copy *path* to ``<name>.backup.<stamp>`` next to it."""
    target = path.with_name(f"{path.name}.backup.{backup_stamp(now)}")
    logger.debug(f"Backing up {path} to {target}")
    shutil.copy2(path, target)
    return target
