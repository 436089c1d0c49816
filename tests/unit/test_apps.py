"""
Tests for the unmanaged applications scan.
"""

import os
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import pytest

from devrefresh_py.apps import classify_app, iter_app_bundles, scan_applications
from devrefresh_py.models import AppCategory


def _make_app(root: Path, name: str, when: Optional[datetime] = None) -> Path:
    bundle = root / f"{name}.app"
    (bundle / "Contents").mkdir(parents=True)
    if when is not None:
        ts = when.timestamp()
        os.utime(bundle, (ts, ts))
    return bundle


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Adobe Photoshop 2024", AppCategory.ADOBE),
        ("Acrobat Reader", AppCategory.ADOBE),
        ("Microsoft Word", AppCategory.MICROSOFT),
        ("Microsoft Teams", AppCategory.MICROSOFT),
        ("Logic Pro", AppCategory.AUDIO),
        ("Focusrite Control 2", AppCategory.HARDWARE),
        ("Carbon Copy Cloner", AppCategory.BUSINESS),
        ("Xcode", AppCategory.DEVELOPMENT),
        ("Spotify", AppCategory.MEDIA),
        ("Fantastical", AppCategory.PRODUCTIVITY),
        ("Firefox", AppCategory.BROWSERS),
        ("1Password 7", AppCategory.SECURITY),
        ("Steam", AppCategory.ENTERTAINMENT),
        ("Obsidian", AppCategory.OTHER),
        ("", AppCategory.OTHER),
    ],
)
def test_classify_app(name: str, expected: AppCategory) -> None:
    assert classify_app(name) is expected


def test_first_matching_rule_wins() -> None:
    # Matches both the Adobe and the Microsoft rules.
    assert classify_app("Adobe Microsoft Bridge") is AppCategory.ADOBE


@pytest.mark.parametrize(
    "name", ["Zoom", "zoom.us", "Arc", "Search", "Tower 10", "∆ weird ∆", "x" * 300]
)
def test_every_name_gets_exactly_one_category(name: str) -> None:
    assert isinstance(classify_app(name), AppCategory)


def test_iter_app_bundles_depth(tmp_path: Path) -> None:
    _make_app(tmp_path, "Top")
    _make_app(tmp_path / "Utilities", "Nested")
    _make_app(tmp_path / "a" / "b", "TooDeep")
    (tmp_path / "notes.txt").write_text("x")

    names = sorted(p.stem for p in iter_app_bundles(tmp_path))
    assert names == ["Nested", "Top"]


def test_missing_root_yields_nothing(tmp_path: Path) -> None:
    assert list(iter_app_bundles(tmp_path / "nope")) == []


def test_scan_excludes_system_and_managed(tmp_path: Path) -> None:
    for name in ["Safari", "Homebrew", "Slack", "Xcode", "Obsidian"]:
        _make_app(tmp_path, name)

    grouped = scan_applications(tmp_path, extra_managed=["Slack"])

    assert set(grouped) == set(AppCategory)
    all_names = sorted(e.name for entries in grouped.values() for e in entries)
    assert all_names == ["Obsidian", "Xcode"]
    assert [e.name for e in grouped[AppCategory.DEVELOPMENT]] == ["Xcode"]
    assert grouped[AppCategory.OTHER][0].modified_at is None


def test_scan_verbose_sorts_oldest_first(tmp_path: Path) -> None:
    _make_app(tmp_path, "Obsidian", datetime(2024, 3, 1, 12))
    _make_app(tmp_path, "Raycast", datetime(2021, 6, 1, 12))
    _make_app(tmp_path, "Bear", datetime(2023, 1, 1, 12))

    grouped = scan_applications(tmp_path, verbose=True)
    others = grouped[AppCategory.OTHER]

    assert [e.name for e in others] == ["Raycast", "Bear", "Obsidian"]
    assert others[0].modified_at == date(2021, 6, 1)
    assert others[0].display(with_date=True) == "Raycast (2021-06-01)"


def test_each_entry_in_exactly_one_category(tmp_path: Path) -> None:
    names = ["Microsoft Excel", "Arc", "Notebooks", "Elgato Stream Deck", "Foo"]
    for name in names:
        _make_app(tmp_path, name)

    grouped = scan_applications(tmp_path)
    seen = [e.name for entries in grouped.values() for e in entries]
    assert sorted(seen) == sorted(names)
    for category, entries in grouped.items():
        assert all(e.category is category for e in entries)
