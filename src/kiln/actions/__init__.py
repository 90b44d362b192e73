"""
Actions layer - Pure Python functions for each build step.

All functions take a BuildContext, are CLI-agnostic and return typed results.
External tool failures raise ToolInvocationError.
"""

from .bundle import BundlerConfig, BundleResult, bundle_scripts, bundler_config_for
from .clean import CleanResult, clean_build
from .env_marker import EnvMarkerResult, read_env_marker, write_env_marker
from .inject import InjectResult, inject_assets, render_template
from .lint import LintResult, lint_paths, lint_sources, lint_tests
from .package import PackageMetadata, PackageResult, ZipPackager, build_manifest, package_app
from .styles import StylesResult, compile_styles

__all__ = [
    "lint_paths",
    "lint_sources",
    "lint_tests",
    "LintResult",
    "clean_build",
    "CleanResult",
    "compile_styles",
    "StylesResult",
    "inject_assets",
    "render_template",
    "InjectResult",
    "write_env_marker",
    "read_env_marker",
    "EnvMarkerResult",
    "bundle_scripts",
    "bundler_config_for",
    "BundlerConfig",
    "BundleResult",
    "package_app",
    "build_manifest",
    "PackageMetadata",
    "PackageResult",
    "ZipPackager",
]
