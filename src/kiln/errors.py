"""Exception types raised by kiln actions and surfaced by the CLI."""

import shlex
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path


class KilnError(Exception):
    """Base class for all kiln errors."""


class UnsupportedPlatformError(KilnError):
    """Raised when a platform token has no packaging target.

    This is the one error that terminates the process instead of failing
    a single task.
    """

    def __init__(self, token: str):
        super().__init__(f"Unsupported platform: {token}")
        self.token = token


class ToolInvocationError(KilnError):
    """Raised when an external tool cannot be started or exits non-zero."""

    def __init__(self, command: Sequence[str], returncode: int | None, stderr: str = ""):
        rendered = " ".join(shlex.quote(part) for part in command)
        if returncode is None:
            message = f"Could not start: {rendered}"
        else:
            message = f"Command failed with exit code {returncode}: {rendered}"
        if stderr:
            message = f"{message}\n{stderr.strip()}"
        super().__init__(message)
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr


class InjectionError(KilnError):
    """Raised when an HTML template block cannot be resolved."""


@dataclass
class LintReport:
    """Output of a linter run that reported violations."""

    label: str
    files: list[Path] = field(default_factory=list)
    output: str = ""


class LintViolation(KilnError):
    """Raised for lint violations when lint failures are configured as fatal."""

    def __init__(self, report: LintReport):
        super().__init__(f"Lint violations in {report.label} ({len(report.files)} files checked)")
        self.report = report
