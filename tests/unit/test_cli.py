"""Tests for CLI commands."""

from typer.testing import CliRunner

from bookings_api import __version__
from bookings_api.cli.commands import app

runner = CliRunner()


def test_version() -> None:
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_init_db() -> None:
    result = runner.invoke(app, ["init-db"])

    assert result.exit_code == 0
    assert "Database initialized" in result.output
