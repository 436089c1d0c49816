"""
Command execution for devrefresh.

``CommandRunner`` wraps ``subprocess`` so that every external tool is invoked
the same way: stdout and stderr merged, output appended to the run log, and
nothing executed at all in preview mode.
"""

import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import Dict, Iterable, NamedTuple, Optional, Sequence

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger("devrefresh.runner")

DRY_RUN_PREFIX = "DRY-RUN: Would execute:"

# Exit status reported when the binary itself cannot be started.
COMMAND_NOT_FOUND = 127


class CommandResult(NamedTuple):
    """Merged output and exit status of one command."""

    output: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


def format_command(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(str(arg)) for arg in argv)


class RunLog:
    """Append-only plain-text log of everything the tools printed."""

    def __init__(self, path: Path):
        self.path = path

    def append(self, text: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(text)
            if not text.endswith("\n"):
                f.write("\n")

    def write_header(
        self, timestamp: str, dry_run: bool = False, skip: Iterable[str] = ()
    ) -> None:
        """Write the once-per-run header block."""
        lines = [
            f"==> Starting update process at {timestamp}",
            f"==> Log file: {self.path}",
        ]
        if dry_run:
            lines.append("==> DRY-RUN MODE: No changes will be made")
        skipped = ",".join(skip)
        if skipped:
            lines.append(f"==> Skipping updates: {skipped}")
        self.append("\n".join(lines))


class CommandRunner:
    """Runs external tools and records their output."""

    def __init__(
        self,
        run_log: RunLog,
        dry_run: bool = False,
        verbose: bool = False,
        console: Optional[Console] = None,
    ):
        self.run_log = run_log
        self.dry_run = dry_run
        self.verbose = verbose
        self.console = console or Console()

    def run(
        self,
        argv: Sequence[str],
        capture: bool = True,
        env: Optional[Dict[str, str]] = None,
    ) -> CommandResult:
        """
        Run a command unless in preview mode.

        Args:
            argv: Command and arguments
            capture: Keep the output in the result. When False the output is
                still logged but an empty string is returned.
            env: Extra environment variables for the command

        Returns:
            CommandResult with the merged stdout/stderr and the exit code.
            A non-zero exit code is returned, not raised.
        """
        cmd_str = format_command(argv)
        if self.dry_run:
            marker = f"{DRY_RUN_PREFIX} {cmd_str}"
            self.run_log.append(marker)
            if self.verbose:
                self.console.print(escape(marker))
            return CommandResult(marker, 0)

        result = self._execute(argv, env)

        if self.verbose:
            self.console.print(escape(result.output), end="")
        elif not result.ok:
            logger.error(f"Command failed with exit code {result.exit_code}: {cmd_str}")
            if result.output:
                self.console.print(escape(result.output), end="")

        return result if capture else CommandResult("", result.exit_code)

    def probe(
        self, argv: Sequence[str], env: Optional[Dict[str, str]] = None
    ) -> CommandResult:
        """Run a read-only query, even in preview mode."""
        return self._execute(argv, env)

    def _execute(
        self, argv: Sequence[str], env: Optional[Dict[str, str]]
    ) -> CommandResult:
        cmd_str = format_command(argv)
        logger.debug(f"Executing: {cmd_str}")

        full_env = None
        if env:
            full_env = os.environ.copy()
            full_env.update(env)

        try:
            completed = subprocess.run(
                list(argv),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                encoding="utf-8",
                errors="replace",
                env=full_env,
            )
            output = completed.stdout or ""
            exit_code = completed.returncode
        except (FileNotFoundError, PermissionError) as e:
            output = f"{argv[0]}: {e}"
            exit_code = COMMAND_NOT_FOUND

        self.run_log.append(output)
        return CommandResult(output, exit_code)
