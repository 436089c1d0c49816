"""
Parsers for the text printed by the package managers devrefresh drives.

None of these formats is a stable contract, so every parser is a plain
``raw text -> records`` function that silently ignores lines it does not
recognise. A change in one tool's output only ever touches one function here.
"""

import re
from typing import List, Optional

from devrefresh_py.models import UpdateRecord

# `brew upgrade`: "wget 1.21.3 -> 1.21.4"
_BREW_UPGRADE_RE = re.compile(
    r"^([A-Za-z0-9_@+.-]+)\s+([0-9]\S*)\s+->\s+([0-9]\S*)"
)

# `brew upgrade --cask`: "🍺  firefox was successfully upgraded!"
_CASK_UPGRADE_RE = re.compile(r"🍺\s+([a-z0-9_@.-]+)\s+was\s+successfully\s+upgraded!")

_CONDA_SECTION_RE = re.compile(r"will\s+be\s+UPDATED")
_CONDA_ROW_RE = re.compile(r"^\s+([A-Za-z0-9_.-]+)\s+(\S+)\s+-->\s+(\S+)")

_MAS_INSTALLED_RE = re.compile(r"==> Installed ([^(]*)")
_MAS_UP_TO_DATE = "Everything up-to-date"

_UV_UPGRADED_RE = re.compile(
    r"Upgraded uv from v?([0-9][0-9A-Za-z.+-]*) to v?([0-9][0-9A-Za-z.+-]*)"
)

_NPM_CHANGED_RE = re.compile(r"added.*changed", re.DOTALL)

# Tree prefixes printed by `npm list`.
_NPM_TREE_RE = re.compile(r"^[\s│├└─┬`|+-]+")


def parse_brew_upgrades(raw: str) -> List[UpdateRecord]:
    """Return formula upgrades from ``brew upgrade`` output, in input order."""
    records: List[UpdateRecord] = []
    for line in raw.splitlines():
        match = _BREW_UPGRADE_RE.match(line)
        if match:
            name, old, new = match.groups()
            records.append(UpdateRecord(name, old, new))
    return records


def parse_cask_upgrades(raw: str) -> List[UpdateRecord]:
    """Return casks reported as successfully upgraded.

    Failed upgrades are not reported.
    """
    records: List[UpdateRecord] = []
    for line in raw.splitlines():
        match = _CASK_UPGRADE_RE.search(line)
        if match:
            records.append(UpdateRecord(match.group(1)))
    return records


def parse_conda_updates(raw: str) -> List[UpdateRecord]:
    """Return rows of the "will be UPDATED" section of ``conda update`` output.

    The section ends at the first blank line after its header; rows after
    that are ignored even if they look like updates.
    """
    records: List[UpdateRecord] = []
    in_section = False
    for line in raw.splitlines():
        if not in_section:
            if _CONDA_SECTION_RE.search(line):
                in_section = True
            continue
        if not line.strip():
            break
        match = _CONDA_ROW_RE.match(line)
        if match:
            name, old, new = match.groups()
            records.append(UpdateRecord(name, old, new))
    return records


def parse_mas_upgrades(raw: str) -> List[UpdateRecord]:
    """Return apps installed by ``mas upgrade``."""
    if not raw.strip() or _MAS_UP_TO_DATE in raw:
        return []

    records: List[UpdateRecord] = []
    for line in raw.splitlines():
        match = _MAS_INSTALLED_RE.search(line)
        if not match:
            continue
        name = match.group(1).rstrip()
        if name:
            records.append(UpdateRecord(name))
    return records


def parse_uv_self_update(raw: str) -> Optional[UpdateRecord]:
    """Return the uv version change from ``uv self update``, if any."""
    match = _UV_UPGRADED_RE.search(raw)
    if not match:
        return None
    return UpdateRecord("uv", match.group(1), match.group(2))


def uv_is_current(raw: str) -> bool:
    return "already up to date" in raw or "No update available" in raw


def omz_is_current(raw: str) -> bool:
    return (
        "Already up to date" in raw
        or "Oh My Zsh is already at the latest version" in raw
    )


def macos_is_current(raw: str) -> bool:
    return "No new software available" in raw


def brew_doctor_ok(raw: str) -> bool:
    return raw.strip() == "Your system is ready to brew."


def npm_install_changed(raw: str) -> bool:
    """True when ``npm install -g`` reports that it added and changed packages."""
    return bool(_NPM_CHANGED_RE.search(raw))


def parse_npm_global_list(raw: str) -> List[str]:
    """Return the package specs (``name@version``) from ``npm list -g --depth=0``.

    The first line is the prefix directory and is skipped.
    """
    specs: List[str] = []
    for line in raw.splitlines()[1:]:
        spec = _NPM_TREE_RE.sub("", line).strip()
        if spec and "@" in spec and not spec.startswith("(empty)"):
            specs.append(spec.split()[0])
    return specs


def package_name_from_spec(spec: str) -> str:
    """Strip the trailing ``@version`` from an npm package spec.

    Scoped packages keep their leading ``@``.
    """
    idx = spec.rfind("@")
    if idx > 0:
        return spec[:idx]
    return spec
