"""
Console rendering for devrefresh.

All user-facing output goes through ``Reporter`` so the same run can be
printed to a terminal or captured in tests.
"""

from typing import Dict, Iterable, List, Optional

from rich.console import Console
from rich.markup import escape

from devrefresh_py.models import (
    AppCategory,
    AppEntry,
    Category,
    CategoryResult,
    RunSummary,
    Status,
    UpdateRecord,
)

RULE = "✨ " + "─" * 80

_APP_CATEGORIES = (Category.BREW_CASK, Category.APPSTORE)
# Categories whose updated items are always listed one per line.
_LISTED_CATEGORIES = _APP_CATEGORIES + (
    Category.BREW,
    Category.CONDA,
    Category.NPM,
)


def format_elapsed(seconds: float) -> str:
    """Return ``Xm Ys`` for a minute or more, ``Ys`` otherwise."""
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def summary_headline(total: int, categories: int) -> str:
    if total <= 0:
        return "🎯 Perfect! Everything is up to date"
    if total == 1:
        return "🎉 Success! 1 item refreshed"
    if total < 5:
        return f"🎉 Success! {total} items refreshed across {categories} categories"
    return f"🚀 Excellent! {total} items refreshed across {categories} categories"


def status_line(result: CategoryResult) -> str:
    """Return the one-line status for *result*."""
    label = result.category.label
    detail = result.detail
    status = result.status

    if status is Status.NO_UPDATES:
        return f"  💤 {label}: {detail or 'Everything current'}"
    if status is Status.UPDATED:
        if len(result.records) > 1 or result.category in _LISTED_CATEGORIES:
            icon = "🛠️ " if result.category in _APP_CATEGORIES else "📦"
            return f"  {icon} {label}: {detail or f'{len(result.records)} updated'}"
        return f"  ✅ {label}: {detail or 'Updated'}"
    if status is Status.WARNING:
        return f"  ⚠️  {label}: {detail}"
    if status is Status.ERROR:
        return f"  ❌ {label}: {detail}"
    if status is Status.SKIPPED:
        return f"  ⏭️  {label}: Skipped"
    return f"  ➖ {label}: Not installed"


class Reporter:
    """Prints banners, per-category status and the final summary."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console or Console()
        self.verbose = verbose

    def _print(self, text: str = "") -> None:
        self.console.print(escape(text), highlight=False)

    def banner(self, dry_run: bool, skip: Iterable[str] = ()) -> None:
        self._print()
        self._print(RULE)
        self._print()
        if dry_run:
            self._print("🔍 System Update Preview")
            self._print("   Showing what would be updated (no changes will be made)")
        else:
            self._print("🚀 System Update Session")
            self._print("   Refreshing your development environment")
        skipped = ",".join(skip)
        if skipped:
            self._print(f"   Skipping: {skipped}")
        self._print()
        self._print(RULE)

    def section(self, title: str) -> None:
        self._print()
        self._print(title)

    def show_result(self, result: CategoryResult) -> None:
        if result.status in (Status.SKIPPED, Status.NOT_INSTALLED) and not self.verbose:
            return
        self._print(status_line(result))
        if result.hint:
            self._print(f"      {result.hint}")
        if len(result.records) > 1 or result.category in _LISTED_CATEGORIES:
            self.show_package_list(result.records)

    def show_package_list(self, records: Iterable[UpdateRecord]) -> None:
        for record in records:
            self._print(f"      • {record.describe()}")

    def final_summary(self, summary: RunSummary) -> None:
        self._print()
        self._print(RULE)
        self._print()
        self._print(
            summary_headline(summary.total_updates, summary.categories_with_updates)
        )
        self._print()
        self._print(f"⏱️  Completed in {format_elapsed(summary.elapsed)}")

        issues = summary.issues
        if issues:
            self._print()
            self._print("🔍 Action Required:")
            for issue in issues:
                self._print(f"   {issue}")

        self._print()
        self._print(RULE)

    def already_running(self) -> None:
        self._print("Update already running in this session. Exiting.")

    def audit(self) -> None:
        for line in AUDIT_TEXT:
            self._print(line)

    def unmanaged_apps(self, grouped: Dict[AppCategory, List[AppEntry]]) -> None:
        self._print()
        self._print(RULE)
        self._print()
        self._print("📋 Applications Not Managed by This Tool")
        self._print("   Categorized by update mechanism")
        if self.verbose:
            self._print("   📅 Sorted by oldest first (apps that may need updates)")
        self._print()
        self._print(RULE)
        self._print()

        found = False
        for category in AppCategory:
            entries = grouped.get(category) or []
            if not entries:
                continue
            found = True
            self._print(f"{category.emoji} {category.label}:")
            for entry in entries:
                self._print(f"   • {entry.display(with_date=self.verbose)}")
            self._print()

        if not found:
            self._print("✅ No unmanaged applications found!")
            self._print()

        self._print("💡 Update Recommendations:")
        self._print("   • Adobe apps: Use Adobe Creative Cloud for updates")
        self._print("   • Microsoft apps: Use Microsoft AutoUpdate or built-in updaters")
        self._print("   • Other apps: Check app menus for 'Check for Updates' options")
        self._print()
        self._print(RULE)


AUDIT_TEXT = [
    "",
    RULE,
    "",
    "🔍 Update Coverage Audit",
    "   What devrefresh manages vs. other mechanisms",
    "",
    RULE,
    "",
    "✅ What We Manage (Package Managers):",
    "   🖥️  macOS system updates",
    "   🛠️  Oh My Zsh shell framework",
    "   🛠️  Homebrew packages & desktop applications",
    "   🐍 Conda Python packages & environments",
    "   🐍 Node Version Manager (NVM) & Node.js",
    "   🐍 UV Python package manager",
    "   🐍 Global npm packages",
    "   📱 Mac App Store applications",
    "",
    "🔄 Self-Updating Applications:",
    "   🎨 Adobe Creative Suite    → Adobe Creative Cloud handles updates",
    "   🏢 Microsoft Office       → Microsoft AutoUpdate handles updates",
    "",
    "⚙️  Other Applications (Manual Updates):",
    "   🎵 Professional Audio     → Logic Pro, audio plugins, music software",
    "   🔧 Hardware Utilities     → Focusrite, Loupedeck, CalDigit tools",
    "   💼 Business Tools         → Specialized software with built-in updaters",
    "   🧑‍💻 Development Tools      → JetBrains Toolbox, vendor-specific IDEs",
    "",
    "💡 Recommendation:",
    "   • devrefresh handles your package manager ecosystem",
    "   • Adobe & Microsoft apps update automatically via their own mechanisms",
    "   • Other apps typically have built-in \"Check for Updates\" options",
    "   • Use --dry-run to see exactly what devrefresh will update",
    "   • Use --list-unmanaged to see which installed apps fall outside it",
    "",
    RULE,
    "",
]
