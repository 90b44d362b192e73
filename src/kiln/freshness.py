"""Freshness checks for derived build outputs."""

from collections.abc import Iterable
from pathlib import Path


def expand_globs(root: Path, patterns: Iterable[str]) -> list[Path]:
    """Expand root-relative glob patterns to a sorted list of existing files."""
    matches: set[Path] = set()
    for pattern in patterns:
        if Path(pattern).is_absolute():
            candidate = Path(pattern)
            if candidate.is_file():
                matches.add(candidate)
            continue
        matches.update(p for p in root.glob(_files_pattern(pattern)) if p.is_file())
    return sorted(matches)


def _files_pattern(pattern: str) -> str:
    """Make a trailing ``**`` match files on every Python version."""
    if pattern == "**" or pattern.endswith("/**"):
        return f"{pattern}/*"
    return pattern


def newest_mtime(paths: Iterable[Path]) -> float:
    """Return the newest modification time among paths (0.0 when empty)."""
    return max((p.stat().st_mtime for p in paths), default=0.0)


def is_stale(sources: str | Iterable[Path], derived_file: Path, root: Path | None = None) -> bool:
    """
    Decide whether a derived file needs to be rebuilt.

    Args:
        sources: Glob pattern (relative to root) or explicit source paths
        derived_file: The compiled output the sources produce
        root: Base directory for a glob pattern (default: cwd)

    Returns:
        True if the derived file is missing or any source is strictly newer
    """
    if not derived_file.exists():
        return True

    if isinstance(sources, str):
        source_files = expand_globs(root or Path.cwd(), [sources])
    else:
        source_files = [Path(p) for p in sources]

    return newest_mtime(source_files) > derived_file.stat().st_mtime
