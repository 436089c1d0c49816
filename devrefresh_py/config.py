"""
Configuration file support for devrefresh.

Loads settings from ``~/.config/devrefresh/config.yaml`` (or
``$XDG_CONFIG_HOME/devrefresh/config.yaml``) and exposes them as a typed
dataclass that the CLI merges with command-line flags.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger("devrefresh.config")

DEFAULT_NPM_PACKAGES = ["@google/gemini-cli", "@anthropic-ai/claude-code"]


def default_config_path() -> Path:
    """Return the default configuration file path.

    Uses ``$XDG_CONFIG_HOME/devrefresh/config.yaml`` when set, otherwise
    falls back to ``~/.config/devrefresh/config.yaml``.
    """
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "devrefresh" / "config.yaml"
    return Path.home() / ".config" / "devrefresh" / "config.yaml"


def default_log_path() -> Path:
    """Return the default run log location under the XDG state directory."""
    xdg = os.environ.get("XDG_STATE_HOME")
    base = Path(xdg) if xdg else Path.home() / ".local" / "state"
    return base / "devrefresh" / "update.log"


def _path(value: Any, default: Path) -> Path:
    if not value:
        return default
    return Path(str(value)).expanduser()


def _str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    if isinstance(value, list):
        return [str(v).strip() for v in value if str(v).strip()]
    logger.warning("Expected a list, got: %s", value)
    return []


@dataclass
class DevrefreshConfig:
    """Top-level configuration loaded from the YAML file."""

    log_file: Path = field(default_factory=default_log_path)
    skip: List[str] = field(default_factory=list)
    applications_dir: Path = Path("/Applications")
    oh_my_zsh_dir: Path = field(default_factory=lambda: Path.home() / ".oh-my-zsh")
    nvm_dir: Path = field(default_factory=lambda: Path.home() / ".nvm")
    npm_packages: List[str] = field(default_factory=lambda: list(DEFAULT_NPM_PACKAGES))
    extra_managed_apps: List[str] = field(default_factory=list)
    # CLI reinstalled after an NVM upgrade, and the alias that points at it.
    reinstall_tool: str = "claude"
    tool_alias: str = "claudee"

    @property
    def aliases_file(self) -> Path:
        return self.oh_my_zsh_dir / "custom" / "aliases.zsh"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DevrefreshConfig":
        """Construct a ``DevrefreshConfig`` from a parsed YAML dictionary."""
        if not isinstance(data, dict):
            return cls()

        defaults = cls()
        npm_packages = data.get("npm_packages")
        return cls(
            log_file=_path(data.get("log_file"), defaults.log_file),
            skip=_str_list(data.get("skip")),
            applications_dir=_path(
                data.get("applications_dir"), defaults.applications_dir
            ),
            oh_my_zsh_dir=_path(data.get("oh_my_zsh_dir"), defaults.oh_my_zsh_dir),
            nvm_dir=_path(data.get("nvm_dir"), defaults.nvm_dir),
            npm_packages=(
                _str_list(npm_packages)
                if npm_packages is not None
                else defaults.npm_packages
            ),
            extra_managed_apps=_str_list(data.get("extra_managed_apps")),
            reinstall_tool=data.get("reinstall_tool") or defaults.reinstall_tool,
            tool_alias=data.get("tool_alias") or defaults.tool_alias,
        )

    @classmethod
    def from_file(cls, path: Path) -> "DevrefreshConfig":
        """Read a YAML file and return a ``DevrefreshConfig``.

        Returns a default config on any error.
        """
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f.read())
            if data is None:
                return cls()
            return cls.from_dict(data)
        except (IOError, yaml.YAMLError) as e:
            logger.error("Failed to load config from %s: %s", path, e)
            return cls()

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "DevrefreshConfig":
        """Load config from *config_path* or the default location.

        Returns a default config if the file does not exist.
        """
        path = config_path or default_config_path()
        if not path.exists():
            return cls()
        return cls.from_file(path)
