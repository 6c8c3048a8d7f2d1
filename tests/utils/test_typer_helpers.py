"""Tests for typer helpers."""

from typer.testing import CliRunner

from taskflow.main import app
from taskflow.utils.typer_helpers import suggest_commands

runner = CliRunner()


def test_suggest_commands():
    assert suggest_commands("lst", ["list", "add", "stats"]) == ["list"]
    assert suggest_commands("zzz", ["list", "add"]) == []


def test_typo_suggests_command():
    result = runner.invoke(app, ["tasks", "advnce"])

    assert result.exit_code == 2
    assert "advnce" in result.output
    assert "Did you mean" in result.output
    assert "advance" in result.output
    assert result.output.count("Did you mean") == 1


def test_unknown_command_without_match():
    result = runner.invoke(app, ["tasks", "qqqqq"])
    assert result.exit_code == 2
    assert "Did you mean" not in result.output
