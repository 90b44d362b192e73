"""
Inject actions - Replace asset blocks in the HTML shell with built references.

Template blocks look like::

    <!-- build:js kaku.bundled.js -->
    <script src="src/main.js"></script>
    <!-- endbuild -->

    <!-- build:css src/public/css/*.css -->
    <link rel="stylesheet" href="src/public/less/index.less">
    <!-- endbuild -->

Each block becomes one tag per resolved reference. A target containing
glob characters expands to the matching built files.
"""

import glob
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from ..environment import BuildContext
from ..errors import InjectionError
from ..freshness import expand_globs

logger = logging.getLogger(__name__)

BLOCK_START = re.compile(r"(?:^(?P<indent>[ \t]*))?<!--\s*build:(?P<type>\w+)(?:\s+(?P<target>\S+))?\s*-->", re.M)
BLOCK_END = re.compile(r"<!--\s*endbuild\s*-->(?P<eol>[ \t]*\r?\n)?")
LEFTOVER_MARKER = re.compile(r"<!--\s*(?:build:|endbuild)")

TAG_TEMPLATES = {
    "js": '<script src="{ref}"></script>',
    "css": '<link rel="stylesheet" href="{ref}">',
}


@dataclass
class InjectResult:
    """Result of asset injection."""

    success: bool
    output_path: Path
    blocks: int = 0
    references: int = 0
    error: str | None = None


def resolve_target(target: str, root: Path) -> list[str]:
    """Resolve a block target to the references it stands for."""
    if not glob.has_magic(target):
        return [target]
    return [p.relative_to(root).as_posix() for p in expand_globs(root, [target])]


def render_template(text: str, root: Path) -> tuple[str, int, int]:
    """
    Replace every asset block in text.

    Returns:
        Tuple of (rendered text, block count, reference count)

    Raises:
        InjectionError: On unknown block types, unterminated blocks, missing
            targets, or targets that resolve to nothing
    """
    parts = []
    position = 0
    blocks = 0
    references = 0

    while match := BLOCK_START.search(text, position):
        block_type = match.group("type")
        target = match.group("target")
        line = text.count("\n", 0, match.start()) + 1

        if block_type not in TAG_TEMPLATES:
            raise InjectionError(f"Unknown block type '{block_type}' at line {line}")
        if not target:
            raise InjectionError(f"Block at line {line} has no target")

        end = BLOCK_END.search(text, match.end())
        if end is None:
            raise InjectionError(f"Unterminated build:{block_type} block at line {line}")
        if BLOCK_START.search(text, match.end(), end.start()) is not None:
            raise InjectionError(f"Block at line {line} contains a nested build block")

        refs = resolve_target(target, root)
        if not refs:
            raise InjectionError(f"Block '{target}' at line {line} matched no built files")

        indent = match.group("indent") or ""
        tags = [indent + TAG_TEMPLATES[block_type].format(ref=ref) for ref in refs]
        trailing = "\n" if end.group("eol") else ""

        parts.append(text[position : match.start()])
        parts.append("\n".join(tags) + trailing)
        position = end.end()
        blocks += 1
        references += len(refs)

    if BLOCK_END.search(text, position):
        raise InjectionError("endbuild marker without a matching build block")

    parts.append(text[position:])
    rendered = "".join(parts)

    leftover = LEFTOVER_MARKER.search(rendered)
    if leftover is not None:
        line = rendered.count("\n", 0, leftover.start()) + 1
        raise InjectionError(f"Unresolved build marker at line {line} of the rendered output")

    return rendered, blocks, references


def inject_assets(ctx: BuildContext) -> InjectResult:
    """
    Render the HTML template into the application entry point.

    Raises:
        InjectionError: If the template has unresolvable blocks
        FileNotFoundError: If the template does not exist
    """
    config = ctx.config
    template = config.paths.resolve(config.paths.template)
    output = config.paths.resolve(config.paths.entry_html)

    text = template.read_text(encoding="utf-8")
    rendered, blocks, references = render_template(text, config.root)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered, encoding="utf-8")
    logger.info(f"Injected {references} asset reference(s) from {blocks} block(s) into {output.name}")

    return InjectResult(success=True, output_path=output, blocks=blocks, references=references)
