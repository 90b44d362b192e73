"""
External tool invocation.

Every compiler, bundler and linter call goes through run_tool so failures
surface the same way. No timeouts are applied.
"""

import logging
import shlex
import shutil
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .errors import ToolInvocationError

logger = logging.getLogger(__name__)


@dataclass
class ToolResult:
    """Outcome of an external tool run."""

    command: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


def format_command(command: Sequence[str]) -> str:
    return " ".join(shlex.quote(part) for part in command)


def run_tool(command: Sequence[str], cwd: Path | None = None, check: bool = True) -> ToolResult:
    """
    Run an external tool and wait for it to finish.

    Args:
        command: Executable and arguments
        cwd: Working directory (the project root)
        check: Raise ToolInvocationError on a non-zero exit

    Returns:
        ToolResult with captured output

    Raises:
        ToolInvocationError: If the tool cannot be started, or exits non-zero with check=True
    """
    logger.debug(f"Running: {format_command(command)}")
    try:
        proc = subprocess.run(list(command), cwd=cwd, capture_output=True, text=True)
    except OSError as e:
        raise ToolInvocationError(command, None, str(e)) from e

    result = ToolResult(
        command=list(command),
        returncode=proc.returncode,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
    )
    if check and not result.success:
        raise ToolInvocationError(command, result.returncode, result.stderr or result.stdout)
    return result


def get_tool_path(tool_name: str) -> Path | None:
    """Find a tool executable on PATH (or as an explicit path)."""
    candidate = Path(tool_name)
    if candidate.is_absolute() and candidate.exists():
        return candidate

    sys_path = shutil.which(tool_name)
    if sys_path:
        return Path(sys_path)

    return None


def check_tools_status(tools: dict[str, str]) -> dict[str, Path | None]:
    """
    Check status of configured external tools.

    Args:
        tools: Mapping of tool name to configured executable

    Returns:
        Dict mapping tool name to path (None if not found)
    """
    return {name: get_tool_path(executable) for name, executable in tools.items()}
