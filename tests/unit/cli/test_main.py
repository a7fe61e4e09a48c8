"""Unit tests for the main CLI application."""

import logging

from debloatctl import __version__
from debloatctl.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestMainApp:
    """Tests for global options and command registration."""

    def test_version(self) -> None:
        """--version prints the version and exits."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert f"debloatctl version {__version__}" in result.stdout

    def test_help_lists_commands(self) -> None:
        """Help shows every command."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("list", "remove", "restore", "lists", "config"):
            assert command in result.stdout

    def test_no_args_shows_help(self) -> None:
        """Running without a command prints usage."""
        result = runner.invoke(app, [])

        assert "Usage" in result.output

    def test_verbose_enables_debug_logging(self) -> None:
        """--verbose sets the root logger to DEBUG."""
        runner.invoke(app, ["--verbose", "lists"])

        assert logging.getLogger().level == logging.DEBUG

    def test_quiet_limits_logging_to_errors(self) -> None:
        """--quiet only lets errors through."""
        runner.invoke(app, ["--quiet", "lists"])

        assert logging.getLogger().level == logging.ERROR
