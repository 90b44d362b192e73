"""Shared pytest fixtures for kiln tests."""

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from kiln.config import load_config

TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <!-- build:css src/public/css/*.css -->
    <link rel="stylesheet" href="src/public/less/index.less">
    <!-- endbuild -->
  </head>
  <body>
    <!-- build:js kaku.bundled.js -->
    <script src="src/main.js"></script>
    <!-- endbuild -->
  </body>
</html>
"""


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def project(tmp_path):
    """Create a temporary application tree with sources, template and dependencies."""
    root = tmp_path / "app"
    root.mkdir()

    (root / "_index.html").write_text(TEMPLATE)
    (root / "bootup.js").write_text("require('./src/main');\n")
    (root / "LICENSE").write_text("MIT\n")
    (root / "README.md").write_text("# app\n")
    (root / "webpack.config.js").write_text("module.exports = {};\n")
    (root / "package.json").write_text(
        json.dumps(
            {
                "name": "kaku",
                "version": "1.2.3",
                "dependencies": {"react": "^0.13.0", "lodash": "^3.0.0"},
                "devDependencies": {"gulp": "^3.9.0"},
            }
        )
    )

    (root / "config").mkdir()
    (root / "config" / "default.json").write_text("{}\n")

    less_dir = root / "src" / "public" / "less"
    (less_dir / "includes").mkdir(parents=True)
    (less_dir / "index.less").write_text("@import 'vars';\nbody { color: @text; }\n")
    (less_dir / "includes" / "vars.less").write_text("@text: #333;\n")

    (root / "src" / "modules").mkdir(parents=True)
    (root / "src" / "modules" / "player.js").write_text("module.exports = {};\n")
    (root / "src" / "main.js").write_text("require('./modules/player');\n")
    (root / "tests").mkdir()
    (root / "tests" / "player.test.js").write_text("// test\n")

    for name in ("react", "lodash", "gulp"):
        dep = root / "node_modules" / name
        dep.mkdir(parents=True)
        (dep / "index.js").write_text(f"// {name}\n")

    return root


@pytest.fixture
def config(project):
    """Config rooted at the temporary project."""
    return load_config(root=project)


def _completed(returncode=0, stdout="", stderr=""):
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


class FakeTools:
    """Stands in for lessc, webpack and jshint by writing their outputs."""

    def __init__(self, root: Path):
        self.root = root
        self.calls: list[list[str]] = []
        self.fail: set[str] = set()
        self.lint_output = ""
        self.lint_returncode = 2

    def __call__(self, command, cwd=None, **kwargs):
        command = list(command)
        self.calls.append(command)
        tool = Path(command[0]).name

        if tool in self.fail:
            return _completed(returncode=2, stderr=f"{tool} failed")

        if tool == "lessc":
            dest = Path(command[-1])
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(f"/* compiled from {Path(command[-2]).name} */\n")
        elif tool == "webpack":
            (self.root / "kaku.bundled.js").write_text("/* bundle */\n")
        elif tool == "jshint" and self.lint_output:
            return _completed(returncode=self.lint_returncode, stdout=self.lint_output)

        return _completed()

    def commands_for(self, tool: str) -> list[list[str]]:
        return [c for c in self.calls if Path(c[0]).name == tool]


@pytest.fixture
def fake_tools(project):
    """Patch subprocess.run with fake external tools."""
    tools = FakeTools(project)
    with patch("subprocess.run", side_effect=tools):
        yield tools
