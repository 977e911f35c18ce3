"""Tests for the ``fixture`` command group (load, unload, list)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from fixturectl.cli import cli
from fixturectl.infrastructure.database.engine import create_db_engine

USER = "tests.fixtures.user_fixture"
INIT_DB = "fixturectl.fixtures.init_db_fixture"


@pytest.fixture
def db_rows(project_root: Path, rows):
    """Read rows from the project's default database after a CLI run."""

    def _rows(table: str) -> list[tuple]:
        engine = create_db_engine(f"sqlite:///{project_root / '.fixturectl' / 'fixtures.db'}")
        try:
            return rows(engine, table)
        finally:
            engine.dispose()

    return _rows


@pytest.mark.usefixtures("_isolated_project")
class TestLoadCommand:
    def test_confirmed_load(self, cli_runner: CliRunner, db_rows) -> None:
        result = cli_runner.invoke(cli, ["fixture", "load", "user"], input="y\n")
        assert result.exit_code == 0, result.output
        assert "Fixtures below will be loaded:" in result.output
        assert "Load above fixtures?" in result.output
        assert "Fixtures were successfully loaded from namespace:" in result.output
        assert db_rows("users") == [(1, "alice"), (2, "bob")]

    def test_declined_load(self, cli_runner: CliRunner, db_rows) -> None:
        result = cli_runner.invoke(cli, ["fixture", "load", "user"], input="n\n")
        assert result.exit_code == 0
        assert "Cancelled. No fixtures were loaded." in result.output
        assert db_rows("users") == []

    def test_load_is_default_command(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--no-interact", "fixture", "user"])
        assert result.exit_code == 0, result.output
        assert "successfully loaded" in result.output

    def test_exclusion_tokens(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "--no-interact", "fixture", "load", "*", "-profile"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["data"]["fixtures"] == [INIT_DB, USER]
        assert data["data"]["excluded"] == ["profile"]

    def test_json_keeps_plan_off_stdout(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "--no-interact", "fixture", "load", "user"])
        data = json.loads(result.stdout)
        assert data["ok"] is True
        assert data["data"]["status"] == "loaded"
        assert "Fixtures below will be loaded:" in result.stderr

    def test_global_fixtures_option(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["--json", "--no-interact", "fixture", "unload", "user", "--global-fixtures", "user"],
        )
        data = json.loads(result.stdout)
        assert data["data"]["fixtures"] == [USER]

    def test_camel_case_global_fixtures_alias(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["--json", "--no-interact", "fixture", "unload", "user", "--globalFixtures", ""],
        )
        data = json.loads(result.stdout)
        assert data["data"]["fixtures"] == [USER]

    def test_namespace_option(self, cli_runner: CliRunner, project_root: Path) -> None:
        seeds = project_root / "app" / "seeds"
        seeds.mkdir(parents=True)
        (project_root / "tests" / "fixtures" / "user_fixture.py").rename(seeds / "user_fixture.py")
        result = cli_runner.invoke(
            cli,
            ["--json", "--no-interact", "fixture", "load", "user", "--namespace", "app.seeds",
             "--global-fixtures", ""],
        )
        # users table is created by the init script, which was disabled
        assert result.exit_code == 1
        assert result.stdout == ""
        assert '"code": "FIXTURE_OPERATION_FAILED"' in result.stderr
        assert "app.seeds.user_fixture" in result.stderr

    def test_missing_name_warns(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--no-interact", "fixture", "load", "user", "Ghost"])
        assert result.exit_code == 0
        assert "Some fixtures were not found under path:" in result.stderr
        assert "WARNING: Fixture not found: Ghost" in result.stderr

    def test_nothing_found_exits_one(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "fixture", "load", "Ghost"])
        assert result.exit_code == 1
        assert result.stdout == ""
        payload = json.loads(result.stderr)
        assert payload["error"]["code"] == "FIXTURE_NOT_FOUND"

    def test_everything_excluded(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["fixture", "load", "user", "-user"])
        assert result.exit_code == 0
        assert "could not be found according to given conditions" in result.output
        assert "Nothing to load." in result.output
        assert "Load above fixtures?" not in result.output

    def test_no_names_prints_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["fixture", "load"])
        assert result.exit_code == 0
        assert "Usage:" in result.output
        assert "--examples" in result.output

    def test_no_names_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "fixture", "unload"])
        assert json.loads(result.stdout)["data"]["status"] == "empty_input"

    def test_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "--no-interact", "fixture", "load", "user"])
        assert result.exit_code == 0
        assert result.stdout.strip().splitlines()[-2:] == [INIT_DB, USER]

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["fixture", "load", "--examples"])
        assert result.exit_code == 0
        assert "fixturectl fixture load" in result.output


@pytest.mark.usefixtures("_isolated_project")
class TestUnloadCommand:
    def test_unload_after_load(self, cli_runner: CliRunner, db_rows) -> None:
        cli_runner.invoke(cli, ["--no-interact", "fixture", "load", "*"])
        assert db_rows("profiles") == [(1, 1, "hi")]
        result = cli_runner.invoke(cli, ["fixture", "unload", "*", "-user"], input="y\n")
        assert result.exit_code == 0, result.output
        assert "Unload above fixtures?" in result.output
        assert "Fixtures were successfully unloaded from namespace:" in result.output
        assert db_rows("profiles") == []
        assert db_rows("users") == [(1, "alice"), (2, "bob")]


@pytest.mark.usefixtures("_isolated_project")
class TestListCommand:
    def test_list(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["fixture", "list"])
        assert result.exit_code == 0
        assert USER in result.output
        assert "tests.fixtures.profile_fixture" in result.output

    def test_list_json(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "fixture", "list"])
        data = json.loads(result.stdout)
        assert data["data"]["count"] == 2
        assert all(item["loadable"] for item in data["data"]["items"])

    def test_group_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["fixture", "--examples"])
        assert result.exit_code == 0
        assert "fixturectl fixture User" in result.output
