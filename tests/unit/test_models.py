"""
Tests for the data model.
"""

import pytest

from devrefresh_py.models import (
    AppCategory,
    AppEntry,
    Category,
    CategoryResult,
    RunSummary,
    SKIP_TOKENS,
    Status,
    UpdateRecord,
)


def _updated(category: Category, *names: str) -> CategoryResult:
    return CategoryResult(
        category, Status.UPDATED, tuple(UpdateRecord(n) for n in names)
    )


def test_record_describe_without_versions() -> None:
    assert UpdateRecord("firefox").describe() == "firefox"
    assert UpdateRecord("jq", "1.6", None).describe() == "jq"


def test_records_stored_as_tuple() -> None:
    result = CategoryResult(Category.BREW, Status.UPDATED, [UpdateRecord("jq")])
    assert result.records == (UpdateRecord("jq"),)


def test_records_rejected_for_non_change_status() -> None:
    with pytest.raises(ValueError):
        CategoryResult(Category.BREW, Status.NO_UPDATES, (UpdateRecord("jq"),))


def test_invalid_status_rejected() -> None:
    with pytest.raises(ValueError):
        CategoryResult(Category.BREW, "done")  # type: ignore[arg-type]


def test_every_category_has_a_known_skip_token() -> None:
    assert {c.skip_token for c in Category} == set(SKIP_TOKENS)


def test_summary_counts() -> None:
    summary = RunSummary()
    summary.add(
        [
            CategoryResult(Category.MACOS, Status.WARNING, detail="System updates"),
            CategoryResult(Category.OH_MY_ZSH, Status.NOT_INSTALLED),
            _updated(Category.BREW, "wget", "jq", "git"),
            _updated(Category.BREW_CASK, "firefox"),
            CategoryResult(Category.CONDA, Status.NO_UPDATES),
            CategoryResult(Category.UV, Status.SKIPPED),
            CategoryResult(Category.NVM, Status.ERROR, detail="Failed to fetch"),
        ]
    )
    assert summary.total_updates == 4
    assert summary.categories_with_updates == 2
    assert summary.issues == ["macOS: System updates", "NVM: Failed to fetch"]


def test_total_matches_sum_of_counted_records() -> None:
    results = [
        _updated(Category.BREW, "a", "b"),
        _updated(Category.NPM, "c"),
        CategoryResult(Category.APPSTORE, Status.NO_UPDATES),
        CategoryResult(Category.CONDA, Status.SKIPPED),
    ]
    summary = RunSummary()
    for result in results:
        summary.add([result])
    expected = sum(len(r.records) for r in results if r.counts_toward_total)
    assert summary.total_updates == expected == 3


def test_issues_are_exactly_warnings_and_errors() -> None:
    summary = RunSummary()
    summary.add(
        [CategoryResult(Category.UV, status) for status in Status if status is not Status.UPDATED]
    )
    assert len(summary.issues) == 2


def test_elapsed_uses_finish_time() -> None:
    summary = RunSummary(started_at=100.0)
    summary.finished_at = 165.5
    assert summary.elapsed == 65.5


def test_app_entry_display() -> None:
    entry = AppEntry("Xcode", AppCategory.DEVELOPMENT)
    assert entry.display() == "Xcode"
    assert entry.display(with_date=True) == "Xcode (Unknown)"


def test_twelve_app_categories() -> None:
    assert len(AppCategory) == 12
    assert list(AppCategory)[-1] is AppCategory.OTHER
