"""Tests for the root fixturectl CLI."""

import pytest
from click.testing import CliRunner

from fixturectl import __version__
from fixturectl.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "fixturectl" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.parametrize("command", ["fixture", "upload", "uploads"])
def test_commands_registered(command: str) -> None:
    assert command in cli.commands


@pytest.mark.parametrize("flag", ["--json", "-q", "-v", "--log-json", "--no-interact"])
def test_global_flags_accepted(cli_runner: CliRunner, flag: str) -> None:
    result = cli_runner.invoke(cli, [flag, "--version"])
    assert result.exit_code == 0


def test_fixture_help_lists_subcommands(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["fixture", "--help"])
    assert result.exit_code == 0
    for name in ("load", "unload", "list"):
        assert name in result.output


@pytest.mark.usefixtures("_isolated_project")
def test_config_flag(cli_runner: CliRunner, project_root) -> None:
    config = project_root / "custom.toml"
    config.write_text('[fixtures]\nnamespace = "elsewhere"\n', encoding="utf-8")
    result = cli_runner.invoke(cli, ["--json", "-c", str(config), "fixture", "list"])
    assert result.exit_code == 0
    assert '"namespace": "elsewhere"' in result.stdout
