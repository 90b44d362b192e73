"""Clean action - Remove previous build output."""

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from ..environment import BuildContext

logger = logging.getLogger(__name__)


@dataclass
class CleanResult:
    success: bool
    path: Path
    removed: bool = False


def clean_build(ctx: BuildContext) -> CleanResult:
    """Remove the build output directory. A missing directory is not an error."""
    build_dir = ctx.config.paths.resolve(ctx.config.paths.build_dir)

    if not build_dir.exists():
        return CleanResult(success=True, path=build_dir)

    if build_dir.is_dir():
        shutil.rmtree(build_dir)
    else:
        build_dir.unlink()

    logger.info(f"Removed {build_dir}")
    return CleanResult(success=True, path=build_dir, removed=True)
