"""
Data model for devrefresh.

Records parsed from tool output, per-category results, the run summary that
folds them together, and the application entries produced by the unmanaged
apps scan.
"""

import time
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class UpdateRecord:
    """One "item changed" fact extracted from a tool's output."""

    name: str
    old_version: Optional[str] = None
    new_version: Optional[str] = None

    def describe(self) -> str:
        if self.old_version and self.new_version:
            return f"{self.name} ({self.old_version} → {self.new_version})"
        return self.name


class Status(Enum):
    """Terminal state of a category after its updater has run."""

    NO_UPDATES = "no_updates"
    UPDATED = "updated"
    WARNING = "warning"
    ERROR = "error"
    SKIPPED = "skipped"
    NOT_INSTALLED = "not_installed"


class Category(Enum):
    """Update categories, in presentation order.

    Each value is ``(key, label, skip token)``.
    """

    MACOS = ("macos", "macOS", "macos")
    OH_MY_ZSH = ("oh_my_zsh", "Oh My Zsh", "zsh")
    BREW = ("brew", "Homebrew", "brew")
    BREW_CASK = ("brew_cask", "Applications", "brew")
    CONDA = ("conda", "Conda", "conda")
    UV = ("uv", "UV", "uv")
    NVM = ("nvm", "NVM", "node")
    NPM = ("npm", "Global packages", "npm")
    APPSTORE = ("appstore", "App Store", "appstore")

    @property
    def key(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]

    @property
    def skip_token(self) -> str:
        return self.value[2]


# Tokens accepted by --skip, in the order they are documented.
SKIP_TOKENS: Tuple[str, ...] = (
    "macos",
    "zsh",
    "brew",
    "conda",
    "appstore",
    "node",
    "uv",
    "npm",
)

_UNCOUNTED = (Status.SKIPPED, Status.NOT_INSTALLED, Status.NO_UPDATES)


@dataclass(frozen=True)
class CategoryResult:
    """Outcome of one category for one run."""

    category: Category
    status: Status
    records: Tuple[UpdateRecord, ...] = ()
    detail: Optional[str] = None
    hint: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.status, Status):
            raise ValueError(f"Invalid status: {self.status!r}")
        # Accept any iterable of records but store an immutable tuple.
        object.__setattr__(self, "records", tuple(self.records))
        if self.records and self.status not in (Status.UPDATED, Status.WARNING):
            raise ValueError(f"Status {self.status.value} cannot carry records")

    @property
    def is_issue(self) -> bool:
        return self.status in (Status.WARNING, Status.ERROR)

    @property
    def counts_toward_total(self) -> bool:
        return self.status not in _UNCOUNTED

    def issue_text(self) -> str:
        return f"{self.category.label}: {self.detail or self.status.value}"


@dataclass
class RunSummary:
    """Accumulated results of a run.

    Results are only ever appended; issues and counts are derived from them
    so they cannot drift out of sync.
    """

    results: List[CategoryResult] = field(default_factory=list)
    started_at: float = field(default_factory=time.monotonic)
    finished_at: Optional[float] = None

    def add(self, results: Iterable[CategoryResult]) -> None:
        self.results.extend(results)

    def finish(self) -> None:
        self.finished_at = time.monotonic()

    @property
    def issues(self) -> List[str]:
        return [r.issue_text() for r in self.results if r.is_issue]

    @property
    def total_updates(self) -> int:
        return sum(len(r.records) for r in self.results if r.counts_toward_total)

    @property
    def categories_with_updates(self) -> int:
        return sum(1 for r in self.results if r.counts_toward_total and r.records)

    @property
    def elapsed(self) -> float:
        end = self.finished_at if self.finished_at is not None else time.monotonic()
        return max(0.0, end - self.started_at)


class AppCategory(Enum):
    """Buckets for applications not handled by any updater.

    Members are declared in classification order; ``OTHER`` is the catch-all.
    Each value is ``(label, emoji)``.
    """

    ADOBE = ("Adobe Creative Suite", "🎨")
    MICROSOFT = ("Microsoft Office", "🏢")
    AUDIO = ("Professional Audio", "🎵")
    HARDWARE = ("Hardware Utilities", "🔧")
    BUSINESS = ("Business Tools", "💼")
    DEVELOPMENT = ("Development Tools", "🧑‍💻")
    MEDIA = ("Media & Content", "📱")
    PRODUCTIVITY = ("Productivity", "🎯")
    BROWSERS = ("Browsers & Web", "🌐")
    SECURITY = ("Security & VPN", "🛡️")
    ENTERTAINMENT = ("Entertainment", "🎮")
    OTHER = ("Other Applications", "🔍")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def emoji(self) -> str:
        return self.value[1]


@dataclass(frozen=True)
class AppEntry:
    """An application bundle found by the unmanaged apps scan."""

    name: str
    category: AppCategory
    modified_at: Optional[date] = None

    def display(self, with_date: bool = False) -> str:
        if not with_date:
            return self.name
        when = self.modified_at.isoformat() if self.modified_at else "Unknown"
        return f"{self.name} ({when})"
