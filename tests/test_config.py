"""Tests for configuration loading and validation."""

from pathlib import Path

from kiln.config import KilnConfig, find_config_file, load_config, validate_config


class TestKilnConfig:
    """Tests for KilnConfig dataclass."""

    def test_default_config(self):
        """Test default configuration values."""
        config = KilnConfig()

        assert config.paths.template == Path("_index.html")
        assert config.paths.archive == Path("build/app.zip")
        assert config.lint.fatal is False
        assert config.bundler.minify_transform == "--optimization-minimize"
        assert config.bundler.dev_source_map == "inline-source-map"
        assert config.package.runtime_version == "0.30.0"
        assert "node_modules" == config.package.dependency_dir

    def test_from_yaml_missing_file(self, tmp_path):
        """Test loading from non-existent file returns defaults."""
        config = KilnConfig.from_yaml(tmp_path / "nonexistent.yaml")
        assert config.tools.lessc == "lessc"

    def test_from_yaml_valid_file(self, tmp_path):
        """Test loading from valid YAML file."""
        config_file = tmp_path / "kiln.yaml"
        config_file.write_text("""
paths:
  template: web/_index.html
tools:
  lessc: node_modules/.bin/lessc
lint:
  fatal: true
  src_globs: ["app/**/*.js"]
package:
  company_name: Acme
unknown_section:
  ignored: true
""")
        config = KilnConfig.from_yaml(config_file)

        assert config.paths.template == Path("web/_index.html")
        assert config.tools.lessc == "node_modules/.bin/lessc"
        assert config.lint.fatal is True
        assert config.lint.src_globs == ["app/**/*.js"]
        assert config.package.company_name == "Acme"
        # Defaults preserved
        assert config.package.copyright == "MIT"

    def test_unknown_keys_ignored(self, tmp_path):
        config_file = tmp_path / "kiln.yaml"
        config_file.write_text("tools:\n  nonexistent_tool: x\n")
        config = KilnConfig.from_yaml(config_file)
        assert not hasattr(config.tools, "nonexistent_tool")

    def test_empty_file(self, tmp_path):
        config_file = tmp_path / "kiln.yaml"
        config_file.write_text("")
        assert KilnConfig.from_yaml(config_file).lint.fatal is False

    def test_to_dict_stringifies_paths(self):
        data = KilnConfig()._to_dict()
        assert data["paths"]["template"] == "_index.html"
        assert data["watch"]["poll_interval"] == 0.5

    def test_tool_env_override(self, monkeypatch):
        monkeypatch.setenv("KILN_WEBPACK", "/opt/webpack")
        assert KilnConfig().tools.webpack == "/opt/webpack"


class TestLoadConfig:
    """Tests for load_config."""

    def test_explicit_root(self, tmp_path):
        config = load_config(root=tmp_path)
        assert config.root == tmp_path.resolve()
        assert config.path("index.html") == tmp_path.resolve() / "index.html"

    def test_finds_project_config(self, tmp_path):
        (tmp_path / "kiln.yaml").write_text("lint:\n  fatal: true\n")
        config = load_config(root=tmp_path)
        assert config.lint.fatal is True

    def test_relative_root_in_config_file(self, tmp_path):
        """Test a relative paths.root is resolved against the config file."""
        app = tmp_path / "app"
        app.mkdir()
        config_file = tmp_path / "kiln.yaml"
        config_file.write_text("paths:\n  root: app\n")

        config = load_config(config_path=config_file)

        assert config.root == app.resolve()

    def test_env_root(self, tmp_path, monkeypatch):
        monkeypatch.setenv("KILN_ROOT", str(tmp_path))
        monkeypatch.setenv("KILN_CONFIG_DIR", str(tmp_path / "no-config"))
        config = load_config()
        assert config.root == tmp_path.resolve()

    def test_config_dir_fallback(self, tmp_path, monkeypatch):
        config_dir = tmp_path / "xdg"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("package:\n  company_name: Fallback\n")
        monkeypatch.setenv("KILN_CONFIG_DIR", str(config_dir))

        project = tmp_path / "project"
        project.mkdir()

        assert find_config_file(project) == config_dir / "config.yaml"
        assert load_config(root=project).package.company_name == "Fallback"


class TestValidateConfig:
    def test_valid(self, tmp_path):
        assert validate_config(load_config(root=tmp_path)) == []

    def test_missing_root(self, tmp_path):
        config = KilnConfig()
        config.paths.root = tmp_path / "missing"
        errors = validate_config(config)
        assert any("does not exist" in e for e in errors)

    def test_bad_poll_interval(self, tmp_path):
        config = load_config(root=tmp_path)
        config.watch.poll_interval = 0
        assert validate_config(config) == ["watch.poll_interval must be positive"]
