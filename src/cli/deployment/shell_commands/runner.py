"""Subprocess execution for the helm command module."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Callable, Sequence
from pathlib import Path

from loguru import logger

from .types import CommandResult


class CommandRunner:
    """Runs external tools from a fixed working directory.

    Relative values and manifest paths passed on the command line resolve
    against ``working_dir``. Non-zero exits are reported through
    CommandResult, never raised.
    """

    def __init__(self, working_dir: Path) -> None:
        self.working_dir = working_dir

    def tool_available(self, name: str) -> bool:
        """Return True if ``name`` resolves to an executable on PATH."""
        return shutil.which(name) is not None

    def run(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
    ) -> CommandResult:
        """Run a command to completion.

        Args:
            cmd: Command and arguments
            cwd: Working directory (defaults to working_dir)

        Returns:
            CommandResult with the exit status and captured output
        """
        logger.debug("Running {}", " ".join(cmd))
        completed = subprocess.run(
            list(cmd),
            cwd=cwd or self.working_dir,
            capture_output=True,
            text=True,
        )
        if completed.returncode != 0:
            logger.debug("{} exited with code {}", cmd[0], completed.returncode)
        return CommandResult(
            success=completed.returncode == 0,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            returncode=completed.returncode,
        )

    def run_streaming(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path | None = None,
        on_output: Callable[[str], None] | None = None,
    ) -> CommandResult:
        """Run a command, handing each output line to ``on_output`` as it arrives.

        Used for `helm upgrade --install --wait`, which can block for
        minutes. stderr is merged into stdout, so the returned result holds
        all output in ``stdout``.
        """
        logger.debug("Streaming {}", " ".join(cmd))
        lines: list[str] = []

        with subprocess.Popen(
            list(cmd),
            cwd=cwd or self.working_dir,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            bufsize=1,
        ) as process:
            for raw in process.stdout or ():
                line = raw.rstrip("\n")
                if not line:
                    continue
                lines.append(line)
                if on_output:
                    on_output(line)
            returncode = process.wait()

        if returncode != 0:
            logger.debug("{} exited with code {}", cmd[0], returncode)
        return CommandResult(
            success=returncode == 0,
            stdout="\n".join(lines),
            returncode=returncode,
        )
