"""Bundle actions - Script bundling configured by build environment."""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path

from ..config import BundlerSettings
from ..environment import BuildContext, BuildEnvironment
from ..tools import run_tool

logger = logging.getLogger(__name__)


@dataclass
class BundlerConfig:
    """Arguments passed to the bundler for one run."""

    config_file: str
    transforms: list[str] = field(default_factory=list)
    devtool: str | None = None
    extra_args: list[str] = field(default_factory=list)

    def to_command(self, executable: str) -> list[str]:
        command = [executable, "--config", self.config_file]
        command.extend(self.transforms)
        if self.devtool:
            command.extend(["--devtool", self.devtool])
        command.extend(self.extra_args)
        return command


@dataclass
class BundleResult:
    """Result of a bundler run."""

    success: bool
    command: list[str]
    output_path: Path | None = None
    error: str | None = None


def base_bundler_config(settings: BundlerSettings) -> BundlerConfig:
    """Build the environment-independent bundler config from settings."""
    return BundlerConfig(
        config_file=settings.config_file,
        transforms=list(settings.transforms),
        extra_args=list(settings.extra_args),
    )


def bundler_config_for(
    environment: BuildEnvironment,
    base: BundlerConfig,
    minify_transform: str,
    dev_source_map: str,
) -> BundlerConfig:
    """
    Derive the bundler config for an environment.

    Production appends the minification transform; development enables
    inline source maps instead. The base config is left untouched, so
    repeated runs never stack transforms.
    """
    if environment.is_production:
        return replace(base, transforms=[*base.transforms, minify_transform], devtool=None)
    return replace(base, transforms=list(base.transforms), devtool=dev_source_map)


def bundle_command(ctx: BuildContext) -> list[str]:
    """Full bundler command line for the context's environment."""
    settings = ctx.config.bundler
    bundler_config = bundler_config_for(
        ctx.environment,
        base_bundler_config(settings),
        minify_transform=settings.minify_transform,
        dev_source_map=settings.dev_source_map,
    )
    return bundler_config.to_command(ctx.config.tools.webpack)


def watch_command(ctx: BuildContext) -> list[str]:
    """Bundler command line for the background watch process."""
    return [*bundle_command(ctx), "--watch"]


def bundle_scripts(ctx: BuildContext) -> BundleResult:
    """
    Run the bundler once and wait for it to finish.

    Raises:
        ToolInvocationError: If the bundler reports failure
    """
    command = bundle_command(ctx)
    logger.info(f"Bundling scripts ({ctx.environment.value})")
    run_tool(command, cwd=ctx.config.root)
    return BundleResult(
        success=True,
        command=command,
        output_path=ctx.config.path(ctx.config.bundler.output),
    )
