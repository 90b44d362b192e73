"""Sequential runner - Executes workflow tasks one at a time, stopping at the first failure."""

import logging
from typing import Any

from ..actions import (
    bundle_scripts,
    clean_build,
    compile_styles,
    inject_assets,
    lint_sources,
    lint_tests,
    package_app,
    write_env_marker,
)
from ..actions.package import Packager
from ..environment import BuildContext
from ..errors import UnsupportedPlatformError
from ..workflow import Task, TaskStatus, TaskType, Workflow
from .base import RunnerCallbacks, RunnerResult

logger = logging.getLogger(__name__)


class SequentialRunner:
    """
    Sequential workflow runner.

    Task i+1 starts only after task i completed. The first failure marks
    every remaining task SKIPPED and ends the run; nothing is retried.
    Uses callbacks for progress reporting without coupling to UI.
    """

    def __init__(self, dry_run: bool = False, packager: Packager | None = None):
        """
        Initialize the runner.

        Args:
            dry_run: If True, walk the workflow without invoking any action
            packager: Packager for the package step (default: ZipPackager)
        """
        self.dry_run = dry_run
        self.packager = packager

    def run(self, workflow: Workflow, callbacks: RunnerCallbacks | None = None) -> RunnerResult:
        """
        Execute a workflow.

        Args:
            workflow: The workflow to execute
            callbacks: Optional callbacks for progress reporting

        Returns:
            RunnerResult with execution summary

        Raises:
            UnsupportedPlatformError: Never handled here; the caller terminates
        """
        cb = callbacks or RunnerCallbacks()
        ctx = workflow.context

        if ctx is None:
            return RunnerResult(
                success=False,
                workflow_name=workflow.name,
                errors=["Workflow context is None"],
            )

        if cb.on_workflow_start:
            cb.on_workflow_start(workflow.name, len(workflow.tasks))

        result = RunnerResult(success=True, workflow_name=workflow.name)
        logger.debug(f"Running {workflow.name} ({ctx.environment.value}): {', '.join(workflow.task_ids)}")

        for index, task in enumerate(workflow.tasks):
            if cb.on_task_start:
                cb.on_task_start(task.id, task.description)

            task.status = TaskStatus.RUNNING

            try:
                success = self._execute_task(task, ctx, cb, result)
            except UnsupportedPlatformError as e:
                self._fail(task, str(e), workflow.tasks[index + 1 :], result, cb)
                raise
            except Exception as e:
                logger.debug(f"Task {task.id} raised", exc_info=True)
                self._fail(task, str(e), workflow.tasks[index + 1 :], result, cb)
                break

            if not success:
                self._fail(task, task.error or "task reported failure", workflow.tasks[index + 1 :], result, cb)
                break

            task.status = TaskStatus.COMPLETED
            result.tasks_completed += 1
            if cb.on_task_complete:
                cb.on_task_complete(task.id, True)

        if cb.on_workflow_complete:
            cb.on_workflow_complete(result)

        return result

    def _fail(
        self,
        task: Task,
        error: str,
        remaining: list[Task],
        result: RunnerResult,
        cb: RunnerCallbacks,
    ) -> None:
        """Mark a task failed and every later task skipped."""
        task.status = TaskStatus.FAILED
        task.error = error
        result.success = False
        result.tasks_failed += 1
        result.failed_task = task.id
        result.errors.append(f"Task {task.id}: {error}")
        logger.error(f"Task {task.id} failed: {error}")

        for later in remaining:
            later.status = TaskStatus.SKIPPED
            result.tasks_skipped += 1

        if cb.on_task_complete:
            cb.on_task_complete(task.id, False)

    def _execute_task(
        self,
        task: Task,
        ctx: BuildContext,
        cb: RunnerCallbacks,
        result: RunnerResult,
    ) -> bool:
        """Execute a single task based on its type."""
        if self.dry_run:
            return True

        outcome = self._dispatch(task.task_type, ctx)
        task.result = outcome

        if task.task_type in (TaskType.LINT_SRC, TaskType.LINT_TEST) and outcome.violation is not None:
            result.lint_violations += 1
            if cb.on_lint_report:
                cb.on_lint_report(outcome.violation)

        elif task.task_type == TaskType.STYLES and outcome.skipped:
            if cb.on_styles_skipped:
                cb.on_styles_skipped()

        elif task.task_type == TaskType.PACKAGE and outcome.success:
            result.archive_path = outcome.archive_path
            if cb.on_package_complete:
                cb.on_package_complete(outcome.archive_path, outcome.descriptor.label)

        if not outcome.success:
            task.error = outcome.error
        return outcome.success

    def _dispatch(self, task_type: TaskType, ctx: BuildContext) -> Any:
        if task_type == TaskType.LINT_SRC:
            return lint_sources(ctx)

        elif task_type == TaskType.LINT_TEST:
            return lint_tests(ctx)

        elif task_type == TaskType.CLEAN:
            return clean_build(ctx)

        elif task_type == TaskType.STYLES:
            return compile_styles(ctx)

        elif task_type == TaskType.INJECT:
            return inject_assets(ctx)

        elif task_type == TaskType.ENV_MARKER:
            return write_env_marker(ctx)

        elif task_type == TaskType.BUNDLE:
            return bundle_scripts(ctx)

        elif task_type == TaskType.PACKAGE:
            return package_app(ctx, self.packager)

        raise ValueError(f"No action for task type {task_type}")
