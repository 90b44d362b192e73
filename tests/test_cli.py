"""Tests for CLI commands using Typer's CliRunner."""

import json
from unittest.mock import patch

from kiln.cli import app
from kiln.errors import ToolInvocationError


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_version_option(self, cli_runner):
        """Test --version displays version."""
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help_option(self, cli_runner):
        """Test --help lists pipelines and tasks."""
        result = cli_runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for name in ("default", "production", "build", "watch", "linter:all", "webpack"):
            assert name in result.output

    def test_missing_root(self, cli_runner, tmp_path):
        result = cli_runner.invoke(app, ["default", "--root", str(tmp_path / "missing")])
        assert result.exit_code == 2


class TestPipelineCommands:
    """Tests for pipeline commands."""

    def test_default_succeeds(self, cli_runner, project, fake_tools):
        result = cli_runner.invoke(app, ["default", "--root", str(project)])

        assert result.exit_code == 0
        assert "Complete" in result.output
        assert json.loads((project / "env.json").read_text()) == {"env": "development"}

    def test_failure_exits_nonzero(self, cli_runner, project, fake_tools):
        fake_tools.fail.add("webpack")

        result = cli_runner.invoke(app, ["default", "--root", str(project)])

        assert result.exit_code == 1
        assert "Failed" in result.output
        assert "webpack" in result.output

    def test_lint_violations_reported(self, cli_runner, project, fake_tools):
        fake_tools.lint_output = "player.js: line 1, Missing semicolon."

        result = cli_runner.invoke(app, ["linter:src", "--root", str(project)])

        assert result.exit_code == 0
        assert "Missing semicolon" in result.output

    def test_build_dry_run(self, cli_runner, project):
        with patch("subprocess.run") as mock_run:
            result = cli_runner.invoke(app, ["build", "--dry-run", "--platform", "beos", "--root", str(project)])

        assert result.exit_code == 0
        assert "7 tasks" in result.output
        mock_run.assert_not_called()

    def test_build_unsupported_platform(self, cli_runner, project, fake_tools):
        result = cli_runner.invoke(app, ["build", "--platform", "beos", "--root", str(project)])

        assert result.exit_code == 1
        assert "Unsupported platform: beos" in result.output
        assert not (project / "build" / "app.zip").exists()

    def test_build_linux(self, cli_runner, project, fake_tools):
        result = cli_runner.invoke(app, ["build", "-p", "linux64", "--root", str(project)])

        assert result.exit_code == 0
        assert (project / "build" / "app.zip").exists()
        assert "linux-x64" in result.output


class TestTaskCommands:
    """Tests for single-task commands."""

    def test_env_production(self, cli_runner, project):
        result = cli_runner.invoke(app, ["env", "--production", "--root", str(project)])

        assert result.exit_code == 0
        assert (project / "env.json").read_text() == '{"env":"production"}'

    def test_html_missing_bundle(self, cli_runner, project):
        """Test html fails when a referenced built file is missing."""
        result = cli_runner.invoke(app, ["html", "--root", str(project)])

        assert result.exit_code == 1
        assert not (project / "index.html").exists()

    def test_cleanup(self, cli_runner, project):
        (project / "build").mkdir()
        result = cli_runner.invoke(app, ["cleanup:build", "--root", str(project)])

        assert result.exit_code == 0
        assert not (project / "build").exists()


class TestCheckCommand:
    """Tests for check command."""

    def test_check_shows_tools(self, cli_runner, project):
        with patch("shutil.which", return_value="/usr/local/bin/tool"):
            result = cli_runner.invoke(app, ["check", "--root", str(project)])

        assert result.exit_code == 0
        assert "External Tools" in result.output
        assert "Available" in result.output

    def test_check_missing_tools(self, cli_runner, project):
        with patch("shutil.which", return_value=None):
            result = cli_runner.invoke(app, ["check", "--root", str(project)])

        assert result.exit_code == 0
        assert "Missing" in result.output


class TestWatchCommand:
    """Tests for watch command."""

    def test_watch_tool_failure_exits_nonzero(self, cli_runner, project):
        with patch("kiln.cli.WatchSession") as session_cls:
            session_cls.return_value.run_forever.side_effect = ToolInvocationError(["webpack"], None, "not found")
            result = cli_runner.invoke(app, ["watch", "--root", str(project)])

        assert result.exit_code == 1
        assert "Could not start" in result.output

    def test_watch_interrupt_exits_cleanly(self, cli_runner, project):
        with patch("kiln.cli.WatchSession") as session_cls:
            session_cls.return_value.run_forever.side_effect = KeyboardInterrupt
            result = cli_runner.invoke(app, ["watch", "--root", str(project)])

        assert result.exit_code == 0
        assert "Stopped" in result.output
