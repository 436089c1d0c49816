"""
Tests for the tool output parsers.

The fixtures below are trimmed captures of real tool output.
"""

from devrefresh_py.models import UpdateRecord
from devrefresh_py.parsers import (
    brew_doctor_ok,
    macos_is_current,
    npm_install_changed,
    omz_is_current,
    package_name_from_spec,
    parse_brew_upgrades,
    parse_cask_upgrades,
    parse_conda_updates,
    parse_mas_upgrades,
    parse_npm_global_list,
    parse_uv_self_update,
    uv_is_current,
)

BREW_UPGRADE_OUTPUT = """\
==> Upgrading 3 outdated packages:
wget 1.21.3 -> 1.21.4
python@3.12 3.12.1 -> 3.12.2
node 21.5.0 -> 21.6.1
==> Fetching dependencies for wget: libidn2
==> Pouring wget--1.21.4.arm64_sonoma.bottle.tar.gz
🍺  /opt/homebrew/Cellar/wget/1.21.4: 91 files, 4.5MB
Removing: /opt/homebrew/Cellar/wget/1.21.3... (91 files, 4.5MB)
"""

CASK_UPGRADE_OUTPUT = """\
==> Upgrading 2 outdated packages:
firefox 121.0 -> 122.0
visual-studio-code 1.85.1 -> 1.86.0
==> Upgrading firefox
==> Moving App 'Firefox.app' to '/Applications/Firefox.app'
🍺  firefox was successfully upgraded!
==> Upgrading visual-studio-code
Error: It seems there is already an App at '/Applications/Visual Studio Code.app'.
==> Purging files for version 1.86.0 of Cask visual-studio-code
"""

CONDA_UPDATE_OUTPUT = """\
Collecting package metadata (current_repodata.json): done
Solving environment: done

## Package Plan ##

  environment location: /opt/miniconda3

The following packages will be UPDATED:
  ca-certificates    2023.08.22-hca03da5_0 --> 2023.12.12-hca03da5_0
  openssl            3.0.12-h1a28f6b_0     --> 3.0.13-h1a28f6b_0

The following packages will be DOWNGRADED:
  tk                 8.6.13-h5083fa2_0     --> 8.6.12-hb8d0fd4_0
"""

MAS_UPGRADE_OUTPUT = """\
Upgrading 2 outdated applications:
Keynote (13.2), Xcode (15.2)
==> Downloading Keynote
==> Installed Keynote
==> Downloading Xcode
==> Installed Xcode (15.2)
"""

NPM_LIST_OUTPUT = """\
/Users/dev/.nvm/versions/node/v20.11.0/lib
├── @anthropic-ai/claude-code@1.0.3
├── @google/gemini-cli@0.1.5
├── corepack@0.23.0
└── npm@10.2.4
"""


class TestBrewParser:
    def test_single_match_among_garbage(self) -> None:
        records = parse_brew_upgrades("wget 1.2 -> 1.3\nrandom garbage")
        assert records == [UpdateRecord("wget", "1.2", "1.3")]
        assert records[0].describe() == "wget (1.2 → 1.3)"

    def test_real_output(self) -> None:
        records = parse_brew_upgrades(BREW_UPGRADE_OUTPUT)
        assert [r.name for r in records] == ["wget", "python@3.12", "node"]
        assert records[2] == UpdateRecord("node", "21.5.0", "21.6.1")

    def test_versions_must_start_with_digit(self) -> None:
        assert parse_brew_upgrades("foo latest -> 2.0\nbar 1.0 -> head") == []

    def test_duplicates_are_kept_in_order(self) -> None:
        records = parse_brew_upgrades("jq 1.6 -> 1.7\ngit 2.0 -> 2.1\njq 1.6 -> 1.7")
        assert [r.name for r in records] == ["jq", "git", "jq"]

    def test_empty_input(self) -> None:
        assert parse_brew_upgrades("") == []


class TestCaskParser:
    def test_only_successful_upgrades(self) -> None:
        # The failed visual-studio-code upgrade is not reported.
        assert parse_cask_upgrades(CASK_UPGRADE_OUTPUT) == [UpdateRecord("firefox")]

    def test_without_prefix_no_match(self) -> None:
        assert parse_cask_upgrades("firefox was successfully upgraded!") == []


class TestCondaParser:
    def test_section_stops_at_blank_line(self) -> None:
        records = parse_conda_updates(CONDA_UPDATE_OUTPUT)
        assert [r.name for r in records] == ["ca-certificates", "openssl"]
        assert records[1].old_version == "3.0.12-h1a28f6b_0"
        assert records[1].new_version == "3.0.13-h1a28f6b_0"

    def test_rows_after_blank_line_ignored(self) -> None:
        raw = (
            "The following packages will be UPDATED:\n"
            "  numpy   1.0  -->  1.1\n"
            "\n"
            "  scipy  2.0 --> 2.1\n"
        )
        assert parse_conda_updates(raw) == [UpdateRecord("numpy", "1.0", "1.1")]

    def test_rows_before_header_ignored(self) -> None:
        raw = "  pandas 1.0 --> 2.0\nThe following packages will be UPDATED:\n"
        assert parse_conda_updates(raw) == []

    def test_blank_line_right_after_header_ends_section(self) -> None:
        raw = "will be UPDATED:\n\n  numpy  1.0 --> 1.1\n"
        assert parse_conda_updates(raw) == []

    def test_no_section(self) -> None:
        assert parse_conda_updates("# All requested packages already installed.") == []


class TestMasParser:
    def test_installed_lines(self) -> None:
        assert parse_mas_upgrades(MAS_UPGRADE_OUTPUT) == [
            UpdateRecord("Keynote"),
            UpdateRecord("Xcode"),
        ]

    def test_empty(self) -> None:
        assert parse_mas_upgrades("") == []
        assert parse_mas_upgrades("  \n") == []

    def test_up_to_date_short_circuits(self) -> None:
        raw = "==> Installed Pages\nEverything up-to-date\n"
        assert parse_mas_upgrades(raw) == []


class TestSmallMatchers:
    def test_uv_upgrade(self) -> None:
        raw = "info: Checking for updates...\nsuccess: Upgraded uv from v0.4.1 to v0.4.9!"
        assert parse_uv_self_update(raw) == UpdateRecord("uv", "0.4.1", "0.4.9")

    def test_uv_current(self) -> None:
        assert uv_is_current(
            "success: You're on the latest version of uv (v0.4.9) - already up to date"
        )
        assert parse_uv_self_update("nothing here") is None

    def test_omz_current(self) -> None:
        assert omz_is_current("Oh My Zsh is already at the latest version.")
        assert not omz_is_current("Hooray! Oh My Zsh has been updated!")

    def test_macos_current(self) -> None:
        assert macos_is_current("Software Update Tool\n\nNo new software available.\n")
        assert not macos_is_current("* Label: macOS Sonoma 14.3-23D56")

    def test_brew_doctor(self) -> None:
        assert brew_doctor_ok("Your system is ready to brew.\n")
        assert not brew_doctor_ok("Warning: Some installed formulae are deprecated")

    def test_npm_changed(self) -> None:
        assert npm_install_changed("added 1 package, and changed 3 packages in 4s")
        assert not npm_install_changed("changed 1 package in 2s")

    def test_npm_global_list(self) -> None:
        assert parse_npm_global_list(NPM_LIST_OUTPUT) == [
            "@anthropic-ai/claude-code@1.0.3",
            "@google/gemini-cli@0.1.5",
            "corepack@0.23.0",
            "npm@10.2.4",
        ]

    def test_package_name_from_spec(self) -> None:
        assert package_name_from_spec("@anthropic-ai/claude-code@1.0.3") == (
            "@anthropic-ai/claude-code"
        )
        assert package_name_from_spec("corepack@0.23.0") == "corepack"
        assert package_name_from_spec("@scope/pkg") == "@scope/pkg"
