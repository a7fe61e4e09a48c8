"""Unit tests for config CLI commands."""

import tomllib
from pathlib import Path

from debloatctl.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestConfigPath:
    """Tests for debloatctl config path."""

    def test_default_path(self, isolated_config_home: Path) -> None:
        """The XDG config file path is printed."""
        result = runner.invoke(app, ["config", "path"])

        assert result.exit_code == 0
        assert result.stdout.strip() == str(isolated_config_home / "debloatctl" / "config.toml")

    def test_custom_path(self, tmp_path: Path) -> None:
        """--config overrides the path."""
        custom = tmp_path / "custom.toml"

        result = runner.invoke(app, ["--config", str(custom), "config", "path"])

        assert result.stdout.strip() == str(custom)


class TestConfigShow:
    """Tests for debloatctl config show."""

    def test_show_defaults(self) -> None:
        """Without a config file the defaults are shown."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        data = tomllib.loads(result.stdout)
        assert data["adb"] == {"path": "adb", "user": 0, "timeout_seconds": 60}
        assert data["default_state"] == "installed"

    def test_show_file_values(self, tmp_path: Path) -> None:
        """Values from the config file are shown."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('[adb]\nserial = "R58M123"\n')

        result = runner.invoke(app, ["--config", str(config_file), "config", "show"])

        assert result.exit_code == 0
        assert tomllib.loads(result.stdout)["adb"]["serial"] == "R58M123"

    def test_show_invalid_config(self, tmp_path: Path) -> None:
        """Invalid config content is reported."""
        config_file = tmp_path / "config.toml"
        config_file.write_text("[adb]\nuser = -1\n")

        result = runner.invoke(app, ["--config", str(config_file), "config", "show"])

        assert result.exit_code == 1
        assert "Invalid config content" in result.output


class TestConfigInit:
    """Tests for debloatctl config init."""

    def test_init_writes_defaults(self, isolated_config_home: Path) -> None:
        """init creates the default config file."""
        result = runner.invoke(app, ["config", "init"])

        config_file = isolated_config_home / "debloatctl" / "config.toml"
        assert result.exit_code == 0
        assert "Config written to" in result.stdout
        with open(config_file, "rb") as f:
            assert tomllib.load(f)["adb"]["path"] == "adb"

    def test_init_refuses_overwrite(self, tmp_path: Path) -> None:
        """An existing config is kept unless --force is given."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('default_state = "all"\n')

        result = runner.invoke(app, ["--config", str(config_file), "config", "init"])

        assert result.exit_code == 1
        assert "Config already exists" in result.output
        assert config_file.read_text() == 'default_state = "all"\n'

    def test_init_force(self, tmp_path: Path) -> None:
        """--force overwrites an existing config."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('default_state = "all"\n')

        result = runner.invoke(
            app, ["--config", str(config_file), "config", "init", "--force"]
        )

        assert result.exit_code == 0
        with open(config_file, "rb") as f:
            assert tomllib.load(f)["default_state"] == "installed"
