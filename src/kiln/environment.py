"""Build environment and the per-run context passed to every action."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import KilnConfig


class BuildEnvironment(Enum):
    """Build mode read by environment-sensitive tasks."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"

    @property
    def is_production(self) -> bool:
        return self is BuildEnvironment.PRODUCTION


@dataclass(frozen=True)
class BuildContext:
    """
    Settings for one pipeline run.

    Created once before the first task runs and handed to every action;
    actions only read it.
    """

    environment: BuildEnvironment
    config: "KilnConfig"
    platform_token: str | None = None

    @property
    def is_production(self) -> bool:
        return self.environment.is_production
