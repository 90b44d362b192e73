"""Base runner classes and protocols."""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..errors import LintReport
    from ..workflow import Workflow


@dataclass
class RunnerResult:
    """Result of running a workflow."""

    success: bool
    workflow_name: str
    tasks_completed: int = 0
    tasks_failed: int = 0
    tasks_skipped: int = 0
    failed_task: str | None = None
    archive_path: Path | None = None
    lint_violations: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def tasks_run(self) -> int:
        return self.tasks_completed + self.tasks_failed


@dataclass
class RunnerCallbacks:
    """
    Callbacks for runner progress reporting.

    Allows CLI to display progress without coupling runner to Rich/UI.
    All callbacks are optional - if None, no callback is made.
    """

    # Workflow lifecycle
    on_workflow_start: Callable[[str, int], None] | None = None  # name, total_tasks
    on_workflow_complete: Callable[[RunnerResult], None] | None = None

    # Task lifecycle
    on_task_start: Callable[[str, str], None] | None = None  # task_id, description
    on_task_complete: Callable[[str, bool], None] | None = None  # task_id, success

    # Step details
    on_styles_skipped: Callable[[], None] | None = None
    on_lint_report: Callable[["LintReport"], None] | None = None
    on_package_complete: Callable[[Path, str], None] | None = None  # archive, platform label


class RunnerProtocol(Protocol):
    """Protocol for workflow runners."""

    def run(self, workflow: "Workflow", callbacks: RunnerCallbacks | None = None) -> RunnerResult:
        """
        Execute a workflow.

        Args:
            workflow: The workflow to execute
            callbacks: Optional callbacks for progress reporting

        Returns:
            RunnerResult with execution summary
        """
        ...
