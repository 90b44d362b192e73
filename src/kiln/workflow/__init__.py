"""
Workflow layer - Task and pipeline definitions.

Workflows are DATA STRUCTURES that define what to do.
They do NOT execute anything - that's the runner's job.
"""

from .pipelines import Pipeline, create_task_workflow, create_workflow
from .tasks import Task, TaskStatus, TaskType, Workflow

__all__ = [
    "Task",
    "TaskStatus",
    "TaskType",
    "Workflow",
    "Pipeline",
    "create_workflow",
    "create_task_workflow",
]
