"""
Process Service.

Locates external tools on PATH and runs them as blocking child processes whose
output goes straight to the terminal.
"""

from __future__ import annotations

import os
import shutil
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from ..core.exceptions import PathResolutionError, ToolNotFoundError
from ..core.logging import get_logger

logger = get_logger(__name__)

CommandArg = str | Path


class ProcessRunner:
    """Runs external commands for the pipeline stages.

    Commands inherit stdout and stderr, so a failing tool's own diagnostics are
    what the user sees. No timeout is applied. Environment overrides apply to
    the spawned child only.
    """

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the runner.

        Args:
            dry_run: Log commands instead of executing them
        """
        self.dry_run = dry_run

    def which(self, tool_name: str) -> Path | None:
        """Find a tool on PATH, or None when it is not installed."""
        tool_path = shutil.which(tool_name)
        return Path(tool_path) if tool_path else None

    def run(
        self,
        cmd: Sequence[CommandArg],
        cwd: Path,
        env: Mapping[str, str] | None = None,
    ) -> int:
        """Run a command to completion and return its exit code.

        Args:
            cmd: Program followed by its arguments
            cwd: Working directory for the child
            env: Variables added to a copy of the current environment

        Returns:
            The child's exit code; 128 + N when it was killed by signal N

        Raises:
            PathResolutionError: If the working directory does not exist
            ToolNotFoundError: If the program does not exist or is not executable
        """
        argv = [str(arg) for arg in cmd]
        cmd_str = " ".join(argv)
        logger.info("Running command", command=cmd_str, cwd=str(cwd), env=dict(env or {}))

        if self.dry_run:
            logger.info("Dry run, command skipped", command=cmd_str)
            return 0

        if not Path(cwd).is_dir():
            raise PathResolutionError(message="Working directory does not exist", path=str(cwd))

        child_env = {**os.environ, **env} if env else None
        try:
            completed = subprocess.run(argv, cwd=cwd, env=child_env, check=False)
        except FileNotFoundError as e:
            raise ToolNotFoundError(
                message=f"Tool not found: {argv[0]}",
                cause=e,
                tool_name=Path(argv[0]).name,
                expected_path=argv[0],
            ) from e
        except PermissionError as e:
            raise ToolNotFoundError(
                message=f"Tool is not executable: {argv[0]}",
                cause=e,
                exit_code=126,
                tool_name=Path(argv[0]).name,
                expected_path=argv[0],
                install_hint="check the file's execute permission",
            ) from e

        returncode = completed.returncode
        if returncode < 0:
            returncode = 128 - returncode

        logger.info("Command completed", command=cmd_str, returncode=returncode)
        return returncode
