"""Environment marker - Tells the running application which build mode produced it."""

import json
from dataclasses import dataclass
from pathlib import Path

from ..environment import BuildContext, BuildEnvironment


@dataclass
class EnvMarkerResult:
    success: bool
    path: Path
    environment: BuildEnvironment


def render_env_marker(environment: BuildEnvironment) -> str:
    """Compact JSON body of the marker file."""
    return json.dumps({"env": environment.value}, separators=(",", ":"))


def write_env_marker(ctx: BuildContext) -> EnvMarkerResult:
    """Write the environment marker file for the context's environment."""
    path = ctx.config.paths.resolve(ctx.config.paths.env_marker)
    path.write_text(render_env_marker(ctx.environment), encoding="utf-8")
    return EnvMarkerResult(success=True, path=path, environment=ctx.environment)


def read_env_marker(path: Path) -> BuildEnvironment:
    """Read the environment recorded in a marker file."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return BuildEnvironment(data["env"])
