"""Stylesheet actions - LESS compilation gated by output freshness."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from ..environment import BuildContext
from ..freshness import expand_globs, is_stale
from ..tools import run_tool

logger = logging.getLogger(__name__)


@dataclass
class StylesResult:
    """Result of a stylesheet build."""

    success: bool
    compiled: list[Path] = field(default_factory=list)
    skipped: bool = False
    error: str | None = None


def _is_included(path: Path, include_dirs: list[Path]) -> bool:
    return any(path.is_relative_to(d) for d in include_dirs)


def stylesheet_targets(ctx: BuildContext) -> list[tuple[Path, Path]]:
    """
    List (source, destination) pairs for the stylesheet build.

    Partials under the include paths are imported by other sheets and
    are not compiled on their own.
    """
    config = ctx.config
    styles = config.styles
    include_dirs = [config.path(p) for p in styles.include_paths]
    dest_dir = config.path(styles.dest_dir)
    base = config.path(styles.source_glob.split("*", 1)[0])

    targets = []
    for source in expand_globs(config.root, [styles.source_glob]):
        if _is_included(source, include_dirs):
            continue
        relative = source.relative_to(base) if source.is_relative_to(base) else Path(source.name)
        targets.append((source, dest_dir / relative.with_suffix(".css")))
    return targets


def compile_styles(ctx: BuildContext, force: bool = False) -> StylesResult:
    """
    Compile LESS sources to CSS.

    Skips all work when the freshness target is newer than every source.

    Args:
        ctx: Build context
        force: Compile even if the output is fresh

    Returns:
        StylesResult

    Raises:
        ToolInvocationError: If the compiler fails on any source
    """
    config = ctx.config
    styles = config.styles
    target = config.path(styles.freshness_target)

    if not force and not is_stale(styles.source_glob, target, root=config.root):
        logger.info(f"Styles up to date: {styles.freshness_target}")
        return StylesResult(success=True, skipped=True)

    include_arg = os.pathsep.join(str(config.path(p)) for p in styles.include_paths)
    compiled = []

    for source, dest in stylesheet_targets(ctx):
        dest.parent.mkdir(parents=True, exist_ok=True)
        command = [config.tools.lessc]
        if include_arg:
            command.append(f"--include-path={include_arg}")
        command.extend([str(source), str(dest)])

        run_tool(command, cwd=config.root)
        compiled.append(dest)
        logger.debug(f"Compiled {source.name} -> {dest}")

    return StylesResult(success=True, compiled=compiled)
