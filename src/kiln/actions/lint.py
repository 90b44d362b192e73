"""Lint actions - Static analysis of application scripts."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ..constants import LINT_VIOLATION_EXIT
from ..environment import BuildContext
from ..errors import LintReport, LintViolation, ToolInvocationError
from ..freshness import expand_globs
from ..tools import run_tool

logger = logging.getLogger(__name__)


@dataclass
class LintResult:
    """Result of a lint run."""

    success: bool
    label: str
    files: list[Path] = field(default_factory=list)
    violation: LintReport | None = None
    error: str | None = None

    @property
    def clean(self) -> bool:
        return self.violation is None


def lint_paths(ctx: BuildContext, globs: Iterable[str], label: str) -> LintResult:
    """
    Run the linter over files matched by globs.

    Violations are reported on the result. They fail the task only when
    ``lint.fatal`` is set.

    Args:
        ctx: Build context
        globs: Root-relative glob patterns
        label: Name used in reports (e.g. "src", "test")

    Returns:
        LintResult

    Raises:
        ToolInvocationError: If the linter cannot be started, or exits with
            anything other than success or its violation status
        LintViolation: On violations when lint.fatal is set
    """
    config = ctx.config
    files = expand_globs(config.root, globs)

    if not files:
        logger.info(f"No files to lint for {label}")
        return LintResult(success=True, label=label)

    command = [config.tools.jshint]
    if config.lint.reporter:
        command.append(f"--reporter={config.lint.reporter}")
    command.extend(str(f.relative_to(config.root)) for f in files)

    result = run_tool(command, cwd=config.root, check=False)
    if result.success:
        return LintResult(success=True, label=label, files=files)
    if result.returncode != LINT_VIOLATION_EXIT:
        raise ToolInvocationError(command, result.returncode, result.stderr or result.stdout)

    report = LintReport(label=label, files=files, output=(result.stdout + result.stderr).strip())
    logger.warning(f"Lint violations in {label}:\n{report.output}")

    if config.lint.fatal:
        raise LintViolation(report)

    return LintResult(success=True, label=label, files=files, violation=report)


def lint_sources(ctx: BuildContext) -> LintResult:
    """Lint application sources."""
    return lint_paths(ctx, ctx.config.lint.src_globs, "src")


def lint_tests(ctx: BuildContext) -> LintResult:
    """Lint test scripts."""
    return lint_paths(ctx, ctx.config.lint.test_globs, "test")
