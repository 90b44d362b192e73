"""
Pipeline definitions - Named, fixed sequences of build tasks.

default:     lint sources -> styles -> html -> env marker -> bundle (development)
production:  clean -> lint sources -> styles -> html -> env marker -> bundle (production)
build:       production, then package
"""

from enum import Enum

from ..config import KilnConfig
from ..environment import BuildContext, BuildEnvironment
from .tasks import TASK_DESCRIPTIONS, Task, TaskType, Workflow

_DEVELOPMENT_STEPS = (
    TaskType.LINT_SRC,
    TaskType.STYLES,
    TaskType.INJECT,
    TaskType.ENV_MARKER,
    TaskType.BUNDLE,
)

_PRODUCTION_STEPS = (TaskType.CLEAN, *_DEVELOPMENT_STEPS)


class Pipeline(Enum):
    """Named pipelines with their environment and ordered steps."""

    DEFAULT = ("default", BuildEnvironment.DEVELOPMENT, _DEVELOPMENT_STEPS)
    PRODUCTION = ("production", BuildEnvironment.PRODUCTION, _PRODUCTION_STEPS)
    BUILD = ("build", BuildEnvironment.PRODUCTION, (*_PRODUCTION_STEPS, TaskType.PACKAGE))
    LINT_SRC = ("linter:src", BuildEnvironment.DEVELOPMENT, (TaskType.LINT_SRC,))
    LINT_TEST = ("linter:test", BuildEnvironment.DEVELOPMENT, (TaskType.LINT_TEST,))
    LINT_ALL = ("linter:all", BuildEnvironment.DEVELOPMENT, (TaskType.LINT_SRC, TaskType.LINT_TEST))

    def __init__(self, pipeline_name: str, environment: BuildEnvironment, steps: tuple[TaskType, ...]):
        self.pipeline_name = pipeline_name
        self.environment = environment
        self.steps = steps

    @classmethod
    def from_name(cls, name: str) -> "Pipeline":
        for pipeline in cls:
            if pipeline.pipeline_name == name:
                return pipeline
        raise ValueError(f"Unknown pipeline: {name}")


def _build_workflow(name: str, description: str, ctx: BuildContext, steps: tuple[TaskType, ...]) -> Workflow:
    workflow = Workflow(name=name, description=description, context=ctx)
    for task_type in steps:
        workflow.add_task(
            Task(
                id=task_type.value,
                task_type=task_type,
                description=TASK_DESCRIPTIONS[task_type],
            )
        )
    return workflow


def create_workflow(
    pipeline: Pipeline,
    config: KilnConfig,
    platform_token: str | None = None,
) -> Workflow:
    """
    Create the workflow for a named pipeline.

    This is a FACTORY function: the environment is fixed here, before any
    task runs, and travels with the workflow's BuildContext.

    Args:
        pipeline: Which pipeline to build
        config: Project configuration
        platform_token: Packaging target (only read by the package step)

    Returns:
        Workflow ready for execution by a runner
    """
    ctx = BuildContext(
        environment=pipeline.environment,
        config=config,
        platform_token=platform_token,
    )
    return _build_workflow(
        pipeline.pipeline_name,
        f"{pipeline.pipeline_name} pipeline ({pipeline.environment.value})",
        ctx,
        pipeline.steps,
    )


def create_task_workflow(
    task_type: TaskType,
    config: KilnConfig,
    environment: BuildEnvironment = BuildEnvironment.DEVELOPMENT,
    platform_token: str | None = None,
) -> Workflow:
    """Create a one-step workflow for running a single task directly."""
    ctx = BuildContext(environment=environment, config=config, platform_token=platform_token)
    return _build_workflow(task_type.value, TASK_DESCRIPTIONS[task_type], ctx, (task_type,))
