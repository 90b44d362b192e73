"""
Centralized constants for kiln.

Default project layout, file names and packaging metadata live here
so actions and config share one definition.
"""

# Config file names searched in the project root
CONFIG_FILENAMES = ("kiln.yaml", ".kiln.yaml")

# HTML shell
TEMPLATE_HTML = "_index.html"
ENTRY_HTML = "index.html"

# Environment marker consumed by the running application
ENV_MARKER = "env.json"

# Stylesheets
STYLES_SOURCE_GLOB = "src/public/less/**/*.less"
STYLES_INCLUDE_PATHS = ("src/public/less/includes",)
STYLES_DEST_DIR = "src/public/css"
STYLES_FRESHNESS_TARGET = "src/public/css/index.css"

# Bundler
BUNDLER_CONFIG = "webpack.config.js"
BUNDLED_SCRIPT = "kaku.bundled.js"
MINIFY_TRANSFORM = "--optimization-minimize"
DEV_SOURCE_MAP = "inline-source-map"

# Lint targets
LINT_SRC_GLOBS = (
    "src/modules/**/*.js",
    "src/models/**/*.js",
    "src/views/**/*.js",
)
LINT_TEST_GLOBS = ("tests/**/*.js",)
LINT_VIOLATION_EXIT = 2  # jshint exit status when it reports errors

# Build output
BUILD_DIR = "build"
ARCHIVE_PATH = "build/app.zip"
PACKAGE_JSON = "package.json"

# Files shipped in every archive, before per-dependency globs
STATIC_MANIFEST = (
    "config/**",
    "src/**",
    "bootup.js",
    "index.html",
    "kaku.bundled.js",
    "LICENSE",
    "package.json",
    "README.md",
)
DEPENDENCY_DIR = "node_modules"

# Packager metadata
RUNTIME_VERSION = "0.30.0"
ICON_DIR = "src/public/images/icons"
DARWIN_ICON = f"{ICON_DIR}/kaku.icns"
WIN_ICON = f"{ICON_DIR}/kaku.ico"
COMPANY_NAME = "Kaku"
COPYRIGHT = "MIT"

# Watch mode
RELOAD_WATCH_GLOBS = (
    "kaku.bundled.js",
    "index.html",
    "src/public/css/**",
)
STYLE_WATCH_GLOBS = ("src/public/less/**",)
WATCH_POLL_INTERVAL = 0.5

# External tools (executable names, overridable via config or env)
DEFAULT_TOOLS = {
    "lessc": "lessc",
    "webpack": "webpack",
    "jshint": "jshint",
    "electron": "electron",
}
