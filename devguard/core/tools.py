"""
External tool invocation (formatter and linter).

Tools run as blocking child processes in the project root with inherited
stdout/stderr, so their output streams straight to the user's terminal.
There is no timeout: a hung tool blocks the run until it exits.

The runner never terminates the process itself. It returns a ToolResult and
the orchestrator decides what a failure means.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional


logger = logging.getLogger(__name__)

# Conventional shell status for "command not found"
COMMAND_NOT_FOUND = 127

PRETTIER_COMMAND = ['npx', 'prettier', '--write', '.']
ESLINT_COMMAND = ['npx', 'eslint', '.']


@dataclass
class ToolResult:
    """Outcome of one external tool invocation."""
    command: List[str]
    returncode: int
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return ' '.join(self.command)


class ToolRunner:
    """Runs external commands as blocking subprocesses."""

    def run(self, command: List[str], cwd: Path) -> ToolResult:
        """
        Run a command to completion.

        Args:
            command: Argument list (no shell)
            cwd: Working directory for the child process

        Returns:
            ToolResult; a command that cannot be started yields returncode 127
        """
        logger.debug(f"Running {' '.join(command)} in {cwd}")

        try:
            completed = subprocess.run(command, cwd=cwd, check=False)
        except FileNotFoundError as e:
            msg = f"Command not found: {command[0]}"
            logger.error(msg)
            return ToolResult(command=command, returncode=COMMAND_NOT_FOUND, error=f"{msg} ({e})")
        except PermissionError as e:
            msg = f"Permission denied executing {command[0]}: {e}"
            logger.error(msg)
            return ToolResult(command=command, returncode=COMMAND_NOT_FOUND, error=msg)

        if completed.returncode != 0:
            logger.debug(f"{' '.join(command)} exited with {completed.returncode}")

        return ToolResult(command=command, returncode=completed.returncode)
