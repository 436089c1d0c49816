"""
Node Version Manager updater.

NVM has no self-update command: the latest release is looked up on GitHub
and its install script re-run. Before that the NVM directory is backed up.
If a CLI installed through npm (``claude`` by default) was present, it is
reinstalled under the new setup and the shell alias pointing at it is
rewritten.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional

from devrefresh_py.backup import backup_directory, backup_file
from devrefresh_py.errors import PostUpdateMismatch, UpdateCheckFailed
from devrefresh_py.github import fetch_latest_release, get_github_token
from devrefresh_py.models import Category, CategoryResult, Status, UpdateRecord
from devrefresh_py.parsers import package_name_from_spec, parse_npm_global_list
from devrefresh_py.platform import which
from devrefresh_py.updaters import BaseUpdater, UpdateContext

logger = logging.getLogger(__name__)

NVM_REPO = "nvm-sh/nvm"
INSTALL_SCRIPT_URL = "https://raw.githubusercontent.com/nvm-sh/nvm/v{version}/install.sh"

_VERSION_RE = re.compile(r"^v?(\d+\.\d+\.\d+)\s*$", re.MULTILINE)


def nvm_shell(nvm_dir: Path, command: str) -> List[str]:
    """Return argv running *command* in a bash that has loaded nvm."""
    return ["bash", "-c", f'. "{nvm_dir}/nvm.sh" && {command}']


def find_tool_package(npm_list_output: str, tool: str) -> Optional[str]:
    """Return the npm package (without version) providing *tool*, if listed."""
    for spec in parse_npm_global_list(npm_list_output):
        if tool.lower() in spec.lower():
            return package_name_from_spec(spec)
    return None


def rewrite_alias(aliases_file: Path, alias: str, target: str) -> bool:
    """
    Point ``alias <alias>=`` lines in *aliases_file* at *target*.

    Returns:
        True if the file was rewritten, False if it has no such alias.
    """
    pattern = re.compile(rf"^alias {re.escape(alias)}=.*$", re.MULTILINE)
    content = aliases_file.read_text(encoding="utf-8")
    if not pattern.search(content):
        return False
    backup_file(aliases_file)
    aliases_file.write_text(
        pattern.sub(f'alias {alias}="{target}"', content), encoding="utf-8"
    )
    return True


class NVMUpdater(BaseUpdater):
    """Upgrades NVM to its latest GitHub release."""

    category = Category.NVM

    def is_installed(self, ctx: UpdateContext) -> bool:
        return ctx.config.nvm_dir.is_dir()

    def current_version(self, ctx: UpdateContext) -> Optional[str]:
        nvm_dir = ctx.config.nvm_dir
        result = ctx.runner.probe(
            nvm_shell(nvm_dir, "nvm --version"), env={"NVM_DIR": str(nvm_dir)}
        )
        match = _VERSION_RE.search(result.output)
        if not result.ok or not match:
            return None
        return match.group(1)

    def latest_version(self) -> str:
        try:
            return fetch_latest_release(NVM_REPO, token=get_github_token())
        except UpdateCheckFailed as e:
            logger.debug(str(e))
            raise UpdateCheckFailed("Failed to fetch latest version") from e

    def check(self, ctx: UpdateContext) -> List[CategoryResult]:
        current = self.current_version(ctx)
        if current is None:
            return [
                self.result(Status.ERROR, detail="Not loaded properly, skipping update")
            ]
        logger.debug(f"Current NVM version: v{current}")
        logger.debug("Fetching latest NVM version...")
        latest = self.latest_version()

        if current == latest:
            return [self.result(Status.NO_UPDATES)]

        record = UpdateRecord("nvm", current, latest)
        if ctx.dry_run:
            return [
                self.result(
                    Status.UPDATED, [record], detail=f"Would update to v{latest}"
                )
            ]

        tool_package = self._installed_tool_package(ctx)

        try:
            backup_directory(ctx.config.nvm_dir)
        except OSError as e:
            logger.error(f"NVM backup failed: {e}")
            return [self.result(Status.ERROR, detail=f"Backup failed: {e}")]
        self._install(ctx, latest)

        new_version = self.current_version(ctx) or "unknown"
        if new_version != latest:
            raise PostUpdateMismatch(new_version, latest)

        results = [
            self.result(
                Status.UPDATED,
                [UpdateRecord("nvm", current, new_version)],
                detail=f"Updated to v{new_version}",
            )
        ]
        if tool_package:
            warning = self._reinstall_tool(ctx, tool_package)
            if warning is not None:
                results.append(warning)
        return results

    def _installed_tool_package(self, ctx: UpdateContext) -> Optional[str]:
        tool = ctx.config.reinstall_tool
        if not tool or which(tool) is None:
            return None
        listing = ctx.runner.probe(["npm", "list", "-g", "--depth=0"])
        package = find_tool_package(listing.output, tool)
        if package:
            logger.debug(f"Found {tool} package: {package}")
        return package

    def _install(self, ctx: UpdateContext, version: str) -> None:
        url = INSTALL_SCRIPT_URL.format(version=version)
        ctx.runner.run(
            ["bash", "-c", f'curl -fsSL "{url}" | bash'],
            capture=False,
            env={"NVM_DIR": str(ctx.config.nvm_dir)},
        )

    def _reinstall_tool(
        self, ctx: UpdateContext, package: str
    ) -> Optional[CategoryResult]:
        result = ctx.runner.run(["npm", "install", "-g", package])
        if not result.ok:
            return self.result(
                Status.WARNING,
                detail=f"Failed to reinstall {package}: npm install -g {package}",
            )
        ctx.runner.console.print(f"    Reinstalled {package}")
        return self._update_alias(ctx)

    def _update_alias(self, ctx: UpdateContext) -> Optional[CategoryResult]:
        config = ctx.config
        aliases_file = config.aliases_file
        if not aliases_file.is_file():
            logger.debug(f"No aliases file found at {aliases_file}, skipping alias update")
            return None

        tool_path = which(config.reinstall_tool)
        if tool_path is None:
            logger.warning(
                f"{config.reinstall_tool} command not found, "
                f"cannot update {config.tool_alias} alias"
            )
            return None

        try:
            rewritten = rewrite_alias(aliases_file, config.tool_alias, tool_path)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Cannot update {config.tool_alias} alias: {e}")
            return self.result(
                Status.WARNING,
                detail=f"Failed to update {config.tool_alias} alias in {aliases_file}",
            )
        if rewritten:
            logger.info(f"{config.tool_alias} alias now points to: {tool_path}")
            logger.info("Run 'source ~/.zshrc' or restart terminal to use updated alias")
        else:
            logger.debug(f"No {config.tool_alias} alias found in {aliases_file}")
        return None
