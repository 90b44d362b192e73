"""
Configuration management with YAML loading and environment variable support.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .constants import (
    ARCHIVE_PATH,
    BUILD_DIR,
    BUNDLED_SCRIPT,
    BUNDLER_CONFIG,
    COMPANY_NAME,
    CONFIG_FILENAMES,
    COPYRIGHT,
    DARWIN_ICON,
    DEFAULT_TOOLS,
    DEPENDENCY_DIR,
    DEV_SOURCE_MAP,
    ENTRY_HTML,
    ENV_MARKER,
    LINT_SRC_GLOBS,
    LINT_TEST_GLOBS,
    MINIFY_TRANSFORM,
    PACKAGE_JSON,
    RELOAD_WATCH_GLOBS,
    RUNTIME_VERSION,
    STATIC_MANIFEST,
    STYLE_WATCH_GLOBS,
    STYLES_DEST_DIR,
    STYLES_FRESHNESS_TARGET,
    STYLES_INCLUDE_PATHS,
    STYLES_SOURCE_GLOB,
    TEMPLATE_HTML,
    WATCH_POLL_INTERVAL,
    WIN_ICON,
)


def _env_path(env_var: str, default: Path | None = None) -> Path | None:
    """Get path from environment variable or return default."""
    if value := os.environ.get(env_var):
        return Path(value)
    return default


def _env_tool(name: str) -> str:
    """Get tool executable from KILN_<NAME> or fall back to the default name."""
    return os.environ.get(f"KILN_{name.upper()}", DEFAULT_TOOLS[name])


@dataclass
class PathsConfig:
    """Project paths - relative paths are resolved against ``root``."""

    root: Path = field(default_factory=lambda: _env_path("KILN_ROOT", Path.cwd()))
    template: Path = Path(TEMPLATE_HTML)
    entry_html: Path = Path(ENTRY_HTML)
    env_marker: Path = Path(ENV_MARKER)
    build_dir: Path = Path(BUILD_DIR)
    archive: Path = Path(ARCHIVE_PATH)
    package_json: Path = Path(PACKAGE_JSON)

    def resolve(self, path: Path) -> Path:
        """Resolve a project-relative path."""
        return path if path.is_absolute() else self.root / path


@dataclass
class ToolsConfig:
    lessc: str = field(default_factory=lambda: _env_tool("lessc"))
    webpack: str = field(default_factory=lambda: _env_tool("webpack"))
    jshint: str = field(default_factory=lambda: _env_tool("jshint"))
    electron: str = field(default_factory=lambda: _env_tool("electron"))


@dataclass
class StylesConfig:
    source_glob: str = STYLES_SOURCE_GLOB
    include_paths: list[str] = field(default_factory=lambda: list(STYLES_INCLUDE_PATHS))
    dest_dir: str = STYLES_DEST_DIR
    freshness_target: str = STYLES_FRESHNESS_TARGET


@dataclass
class BundlerSettings:
    config_file: str = BUNDLER_CONFIG
    output: str = BUNDLED_SCRIPT
    transforms: list[str] = field(default_factory=list)
    minify_transform: str = MINIFY_TRANSFORM
    dev_source_map: str = DEV_SOURCE_MAP
    extra_args: list[str] = field(default_factory=list)


@dataclass
class LintConfig:
    src_globs: list[str] = field(default_factory=lambda: list(LINT_SRC_GLOBS))
    test_globs: list[str] = field(default_factory=lambda: list(LINT_TEST_GLOBS))
    fatal: bool = False  # violations abort the pipeline when True
    reporter: str | None = None


@dataclass
class PackageConfig:
    static_manifest: list[str] = field(default_factory=lambda: list(STATIC_MANIFEST))
    dependency_dir: str = DEPENDENCY_DIR
    runtime_version: str = RUNTIME_VERSION
    darwin_icon: str = DARWIN_ICON
    win_icon: str = WIN_ICON
    company_name: str = COMPANY_NAME
    copyright: str = COPYRIGHT


@dataclass
class WatchConfig:
    reload_globs: list[str] = field(default_factory=lambda: list(RELOAD_WATCH_GLOBS))
    style_globs: list[str] = field(default_factory=lambda: list(STYLE_WATCH_GLOBS))
    poll_interval: float = WATCH_POLL_INTERVAL


@dataclass
class LoggingConfig:
    level: str = "INFO"


_SECTIONS = ("paths", "tools", "styles", "bundler", "lint", "package", "watch", "logging")


@dataclass
class KilnConfig:
    paths: PathsConfig = field(default_factory=PathsConfig)
    tools: ToolsConfig = field(default_factory=ToolsConfig)
    styles: StylesConfig = field(default_factory=StylesConfig)
    bundler: BundlerSettings = field(default_factory=BundlerSettings)
    lint: LintConfig = field(default_factory=LintConfig)
    package: PackageConfig = field(default_factory=PackageConfig)
    watch: WatchConfig = field(default_factory=WatchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def root(self) -> Path:
        return self.paths.root

    def path(self, relative: str | Path) -> Path:
        """Resolve a project-relative path against the configured root."""
        return self.paths.resolve(Path(relative))

    @classmethod
    def from_yaml(cls, path: Path) -> "KilnConfig":
        """Load configuration from YAML file."""
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "KilnConfig":
        """Create config from dictionary, ignoring unknown keys."""
        config = cls()

        for section_name in _SECTIONS:
            values = data.get(section_name)
            if not values:
                continue
            section = getattr(config, section_name)
            for key, value in values.items():
                if not hasattr(section, key):
                    continue
                if section_name == "paths" and isinstance(value, str):
                    value = Path(value)
                setattr(section, key, value)

        return config

    def _to_dict(self) -> dict:
        """Convert config to dictionary."""
        result = {}
        for attr in _SECTIONS:
            section = getattr(self, attr)
            result[attr] = {
                key: str(value) if isinstance(value, Path) else value for key, value in vars(section).items()
            }
        return result


def _get_default_config_dir() -> Path:
    """Get default config directory."""
    if config_dir := os.environ.get("KILN_CONFIG_DIR"):
        return Path(config_dir)

    if xdg_config := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_config) / "kiln"

    return Path.home() / ".config" / "kiln"


def find_config_file(root: Path, config_dir: Path | None = None) -> Path | None:
    """Return the first existing config file in the standard search order."""
    if config_dir is None:
        config_dir = _get_default_config_dir()

    search_paths = [root / name for name in CONFIG_FILENAMES]
    search_paths.append(config_dir / "config.yaml")

    for path in search_paths:
        if path.exists():
            return path
    return None


def load_config(config_path: Path | None = None, root: Path | None = None) -> KilnConfig:
    """
    Load configuration for a project.

    Args:
        config_path: Explicit config file (default: searches standard locations)
        root: Project root (default: KILN_ROOT, the config file's ``paths.root``, or cwd)

    Returns:
        KilnConfig with a resolved project root
    """
    search_root = root or _env_path("KILN_ROOT", Path.cwd())

    if config_path is None:
        config_path = find_config_file(search_root)

    config = KilnConfig.from_yaml(config_path) if config_path else KilnConfig()

    if root is not None:
        config.paths.root = root
    elif config_path is not None and not config.paths.root.is_absolute():
        # Relative roots in a config file are relative to that file
        config.paths.root = config_path.parent / config.paths.root

    config.paths.root = config.paths.root.resolve()
    return config


def validate_config(config: KilnConfig) -> list[str]:
    """
    Validate that the project layout is usable.

    Returns:
        List of error messages (empty if valid)
    """
    errors = []
    if not config.root.exists():
        errors.append(f"project root does not exist: {config.root}")
    elif not config.root.is_dir():
        errors.append(f"project root is not a directory: {config.root}")
    if config.watch.poll_interval <= 0:
        errors.append("watch.poll_interval must be positive")
    return errors
