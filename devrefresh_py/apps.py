"""
Listing of applications that no updater manages.

Scans the applications folder, drops apps that ship with macOS or that an
updater already covers, and sorts the rest into categories by name.
"""

import logging
import re
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Pattern, Tuple

from devrefresh_py.models import AppCategory, AppEntry

logger = logging.getLogger(__name__)

DEFAULT_APPLICATIONS_DIR = Path("/Applications")

# fmt: off
SYSTEM_APPS = frozenset(
    {
        "Safari", "Mail", "Calendar", "Contacts", "Maps", "Photos", "Music",
        "TV", "News", "Stocks", "Weather", "Clock", "Calculator", "Dictionary",
        "Preview", "TextEdit", "Font Book", "Digital Color Meter",
        "Keychain Access", "System Information", "Activity Monitor", "Console",
        "Terminal", "Disk Utility", "Grapher", "Screenshot", "VoiceOver Utility",
        "Bluetooth Screen Sharing", "Migration Assistant", "Boot Camp Assistant",
        "System Preferences", "App Store", "Finder",
    }
)

MANAGED_APPS = frozenset(
    {
        "VLC", "Discord", "Claude", "ChatGPT", "Zed", "Warp", "Jan", "Ollama",
        "Homebrew", "iTerm",
    }
)
# fmt: on

# First match wins; names matching nothing fall into OTHER.
_RULES: Tuple[Tuple[AppCategory, Pattern[str]], ...] = tuple(
    (category, re.compile(pattern))
    for category, pattern in (
        (AppCategory.ADOBE, r"Adobe|Acrobat"),
        (AppCategory.MICROSOFT, r"Microsoft"),
        (
            AppCategory.AUDIO,
            r"Logic Pro|GarageBand|Arturia|iZotope|Analog Lab|Piano V"
            r"|VOX Continental|Wurli",
        ),
        (AppCategory.HARDWARE, r"Focusrite|Loupedeck|CalDigit|Elgato|Blackmagic"),
        (
            AppCategory.BUSINESS,
            r"Carbon Copy Cloner|Backblaze|Setapp|CleanMyMac|GoodSync"
            r"|Keyboard Maestro",
        ),
        (AppCategory.DEVELOPMENT, r"JetBrains|Xcode|Developer|Cursor|Tower"),
        (AppCategory.MEDIA, r"Kindle|Prime Video|Netflix|Disney|Spotify"),
        (
            AppCategory.PRODUCTIVITY,
            r"Cardhop|Fantastical|OmniFocus|DEVONthink|Tinderbox|Scrivener"
            r"|Notebooks",
        ),
        (AppCategory.BROWSERS, r"Arc|Firefox|Chrome"),
        (AppCategory.SECURITY, r"Mozilla VPN|RoboForm|1Password"),
        (AppCategory.ENTERTAINMENT, r"Steam|Epic Games|Zoom|WhatsApp|Teams"),
    )
)


def classify_app(name: str) -> AppCategory:
    """Return the single category *name* belongs to."""
    for category, pattern in _RULES:
        if pattern.search(name):
            return category
    return AppCategory.OTHER


def iter_app_bundles(root: Path) -> Iterator[Path]:
    """Yield ``*.app`` bundles directly in *root* or one folder below it."""
    try:
        children = list(root.iterdir())
    except OSError as e:
        logger.warning(f"Cannot read {root}: {e}")
        return
    for child in children:
        if child.suffix == ".app":
            yield child
        elif child.is_dir() and not child.is_symlink():
            try:
                nested = list(child.iterdir())
            except OSError:
                continue
            for sub in nested:
                if sub.suffix == ".app":
                    yield sub


def _modified_date(path: Path) -> Optional[date]:
    try:
        return date.fromtimestamp(path.stat().st_mtime)
    except OSError:
        return None


def scan_applications(
    root: Path = DEFAULT_APPLICATIONS_DIR,
    verbose: bool = False,
    extra_managed: Iterable[str] = (),
) -> Dict[AppCategory, List[AppEntry]]:
    """
    Group unmanaged application bundles under *root* by category.

    Args:
        root: Applications folder to scan
        verbose: Attach modification dates and sort each category oldest
            first (unknown dates last). Otherwise enumeration order is kept.
        extra_managed: Additional app names to leave out

    Returns:
        A dict with an entry (possibly empty) for every ``AppCategory``.
    """
    excluded = SYSTEM_APPS | MANAGED_APPS | frozenset(extra_managed)
    grouped: Dict[AppCategory, List[AppEntry]] = {c: [] for c in AppCategory}

    for bundle in iter_app_bundles(root):
        name = bundle.stem
        if not name or name in excluded:
            continue
        category = classify_app(name)
        modified = _modified_date(bundle) if verbose else None
        grouped[category].append(AppEntry(name, category, modified))

    if verbose:
        for entries in grouped.values():
            entries.sort(key=lambda e: (e.modified_at or date.max, e.name))
    return grouped
