"""Task definitions for workflows."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..environment import BuildContext


class TaskStatus(Enum):
    """Status of a task in a workflow."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


class TaskType(Enum):
    """Build steps a workflow can contain."""

    LINT_SRC = "linter:src"
    LINT_TEST = "linter:test"
    CLEAN = "cleanup:build"
    STYLES = "less"
    INJECT = "html"
    ENV_MARKER = "env"
    BUNDLE = "webpack"
    PACKAGE = "package"


TASK_DESCRIPTIONS = {
    TaskType.LINT_SRC: "Lint application sources",
    TaskType.LINT_TEST: "Lint test scripts",
    TaskType.CLEAN: "Remove previous build output",
    TaskType.STYLES: "Compile stylesheets",
    TaskType.INJECT: "Inject assets into HTML entry point",
    TaskType.ENV_MARKER: "Write environment marker",
    TaskType.BUNDLE: "Bundle scripts",
    TaskType.PACKAGE: "Package distributable archive",
}


@dataclass
class Task:
    """
    A unit of work in a workflow.

    Tasks are data - they describe what to do, not how to do it.
    The runner interprets tasks and executes corresponding actions.
    """

    id: str
    task_type: TaskType
    description: str
    # Runtime state (set by runner)
    status: TaskStatus = TaskStatus.PENDING
    result: Any = None
    error: str | None = None


@dataclass
class Workflow:
    """
    An ordered collection of tasks to execute.

    Each task runs only after the previous one completed.
    """

    name: str
    description: str
    context: "BuildContext | None" = None
    tasks: list[Task] = field(default_factory=list)

    def add_task(self, task: Task) -> None:
        """Add a task to the workflow."""
        self.tasks.append(task)

    def get_task(self, task_id: str) -> Task | None:
        """Get a task by ID."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    @property
    def task_ids(self) -> list[str]:
        return [t.id for t in self.tasks]

    def is_complete(self) -> bool:
        """Check if all tasks reached a terminal status."""
        return all(t.status in (TaskStatus.COMPLETED, TaskStatus.SKIPPED, TaskStatus.FAILED) for t in self.tasks)
