"""Package actions - Produce a distributable archive for one platform."""

import json
import logging
import zipfile
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Protocol

from ..config import KilnConfig
from ..environment import BuildContext
from ..errors import ToolInvocationError
from ..freshness import expand_globs
from ..platforms import PlatformDescriptor, host_arch, host_platform, resolve_platform

logger = logging.getLogger(__name__)


@dataclass
class PackageMetadata:
    """Static metadata handed to the packager."""

    app_name: str
    app_version: str
    runtime_version: str
    darwin_icon: str
    win_icon: str
    company_name: str
    copyright: str


@dataclass
class PackageResult:
    """Result of packaging."""

    success: bool
    archive_path: Path
    descriptor: PlatformDescriptor
    manifest: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)
    error: str | None = None


class Packager(Protocol):
    """Turns a set of project files into one archive."""

    def package(
        self,
        root: Path,
        files: list[str],
        descriptor: PlatformDescriptor,
        metadata: PackageMetadata,
        manifest: list[str],
        output: Path,
    ) -> Path: ...


class ZipPackager:
    """
    Default packager: a deflate zip holding exactly the manifest files.

    The package description (platform, arch, metadata, manifest) is stored
    as JSON in the archive comment, not as an entry.
    """

    def package(
        self,
        root: Path,
        files: list[str],
        descriptor: PlatformDescriptor,
        metadata: PackageMetadata,
        manifest: list[str],
        output: Path,
    ) -> Path:
        output.parent.mkdir(parents=True, exist_ok=True)
        info = {
            "platform": descriptor.platform,
            "arch": descriptor.arch,
            "metadata": asdict(metadata),
            "manifest": manifest,
        }
        try:
            with zipfile.ZipFile(output, "w", zipfile.ZIP_DEFLATED) as zf:
                for name in files:
                    zf.write(root / name, arcname=name)
                zf.comment = json.dumps(info, separators=(",", ":")).encode("utf-8")
        except OSError as e:
            output.unlink(missing_ok=True)
            raise ToolInvocationError(["zip", str(output)], 1, str(e)) from e
        return output


def read_package_info(archive: Path) -> dict:
    """Read the package description stored in an archive's comment."""
    with zipfile.ZipFile(archive) as zf:
        return json.loads(zf.comment.decode("utf-8")) if zf.comment else {}


def read_package_json(config: KilnConfig) -> dict:
    """Load the application's package.json (empty dict if missing)."""
    path = config.paths.resolve(config.paths.package_json)
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def build_manifest(config: KilnConfig) -> list[str]:
    """
    Compute the archive manifest.

    Static paths first, then one glob per runtime dependency. The dependency
    list is re-read on every call.
    """
    dependencies = read_package_json(config).get("dependencies") or {}
    manifest = list(config.package.static_manifest)
    manifest.extend(f"{config.package.dependency_dir}/{name}/**" for name in dependencies)
    return manifest


def collect_manifest_files(root: Path, manifest: list[str]) -> list[str]:
    """Relative POSIX paths of every file matched by the manifest."""
    return [p.relative_to(root).as_posix() for p in expand_globs(root, manifest)]


def package_metadata(config: KilnConfig) -> PackageMetadata:
    package_json = read_package_json(config)
    pkg = config.package
    return PackageMetadata(
        app_name=package_json.get("name", config.root.name),
        app_version=package_json.get("version", "0.0.0"),
        runtime_version=pkg.runtime_version,
        darwin_icon=pkg.darwin_icon,
        win_icon=pkg.win_icon,
        company_name=pkg.company_name,
        copyright=pkg.copyright,
    )


def package_app(ctx: BuildContext, packager: Packager | None = None) -> PackageResult:
    """
    Package the application for the context's platform token.

    Args:
        ctx: Build context; platform_token defaults to the host platform
        packager: Packager to use (default: ZipPackager)

    Returns:
        PackageResult with the archive path

    Raises:
        UnsupportedPlatformError: Before any packaging work, for unknown tokens
        ToolInvocationError: If the packager fails
    """
    config = ctx.config
    token = ctx.platform_token or host_platform()
    descriptor = resolve_platform(token, host_arch())
    logger.info(f"Building {config.root.name} for {descriptor.label}")

    manifest = build_manifest(config)
    files = collect_manifest_files(config.root, manifest)
    output = config.paths.resolve(config.paths.archive)

    archive = (packager or ZipPackager()).package(
        config.root,
        files,
        descriptor,
        package_metadata(config),
        manifest,
        output,
    )

    return PackageResult(
        success=True,
        archive_path=archive,
        descriptor=descriptor,
        manifest=manifest,
        files=files,
    )
