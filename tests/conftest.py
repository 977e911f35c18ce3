"""Shared pytest fixtures and test helpers for fixturectl tests."""

from __future__ import annotations

import textwrap
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy import text
from sqlalchemy.engine import Engine

from fixturectl.config.settings import FixtureSettings
from fixturectl.domain.plan import FixturePlan
from fixturectl.infrastructure.environment import FixtureEnvironment
from fixturectl.services.confirmation import ConfirmationGate

INITDB_SQL = """\
-- tables the sample fixtures seed
CREATE TABLE IF NOT EXISTS users (id INTEGER PRIMARY KEY, name TEXT NOT NULL);
CREATE TABLE IF NOT EXISTS profiles (id INTEGER PRIMARY KEY, user_id INTEGER, bio TEXT);
"""

USER_FIXTURE = """\
from fixturectl.fixtures import TableFixture


def create_fixture(context):
    return TableFixture(context, "users", [{"id": 1, "name": "alice"}, {"id": 2, "name": "bob"}])
"""

PROFILE_FIXTURE = """\
from fixturectl.fixtures import TableFixture


class ProfileFixture:
    def __init__(self, context):
        self._table = TableFixture(context, "profiles", [{"id": 1, "user_id": 1, "bio": "hi"}])

    def load(self):
        self._table.load()

    def unload(self):
        self._table.unload()
"""


def write_fixture(project_root: Path, name: str, source: str, *, subdir: str = "") -> Path:
    """Write ``<name>_fixture.py`` into the default ``tests.fixtures`` namespace."""
    directory = project_root / "tests" / "fixtures"
    if subdir:
        directory = directory / subdir
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{name}_fixture.py"
    path.write_text(textwrap.dedent(source), encoding="utf-8")
    return path


class RecordingReporter:
    """Reporter that keeps every call for assertions."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, FixturePlan]] = []
        self.found: list[str] = []

    def show_plan(self, plan: FixturePlan) -> None:
        self.calls.append(("plan", plan))

    def notify_not_found(self, plan: FixturePlan) -> None:
        self.calls.append(("not_found", plan))

    def notify_unresolved(self, plan: FixturePlan) -> None:
        self.calls.append(("unresolved", plan))

    def notify_nothing_to_process(self, plan: FixturePlan, found: list[str]) -> None:
        self.calls.append(("nothing", plan))
        self.found = list(found)

    @property
    def kinds(self) -> list[str]:
        return [kind for kind, _ in self.calls]


class ScriptedPrompter:
    """Prompter answering from a fixed script, recording the questions."""

    def __init__(self, *answers: bool) -> None:
        self.answers = list(answers)
        self.questions: list[str] = []

    def confirm(self, question: str) -> bool:
        self.questions.append(question)
        return self.answers.pop(0)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary project with a ``tests.fixtures`` namespace and two fixtures.

    This is the single source of truth for the on-disk fixture layout.
    """
    write_fixture(tmp_path, "user", USER_FIXTURE)
    write_fixture(tmp_path, "profile", PROFILE_FIXTURE)
    (tmp_path / "tests" / "fixtures" / "initdb.sql").write_text(INITDB_SQL, encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(project_root: Path) -> FixtureSettings:
    return FixtureSettings.from_cli(project_root=project_root, no_interact=True)


@pytest.fixture
def env(settings: FixtureSettings) -> Generator[FixtureEnvironment]:
    """Environment over the temporary project, entry-point plugins disabled."""
    settings = settings.model_copy(
        update={"plugins": settings.plugins.model_copy(update={"entry_points": False})}
    )
    environment = FixtureEnvironment(settings)
    try:
        yield environment
    finally:
        environment.close()


@pytest.fixture
def engine(env: FixtureEnvironment) -> Engine:
    return env.engine


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def gate(reporter: RecordingReporter) -> ConfirmationGate:
    """Gate that approves and records what it was shown."""
    return ConfirmationGate(ScriptedPrompter(True), reporter)


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp project so the CLI picks it up.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.delenv("FIXTURECTL_CONFIG", raising=False)
    monkeypatch.chdir(project_root)


def table_rows(engine: Engine, table: str) -> list[tuple]:
    """All rows of *table* ordered by id (empty if the table is missing)."""
    with engine.connect() as conn:
        exists = conn.execute(
            text("SELECT name FROM sqlite_master WHERE type='table' AND name=:t"), {"t": table}
        ).first()
        if exists is None:
            return []
        return [tuple(r) for r in conn.execute(text(f"SELECT * FROM {table} ORDER BY id"))]


@pytest.fixture
def rows():
    """Expose :func:`table_rows` to tests."""
    return table_rows


@pytest.fixture
def add_fixture(project_root: Path):
    """Write an extra definition file into the temp project's namespace."""

    def _add(name: str, source: str, *, subdir: str = "") -> Path:
        return write_fixture(project_root, name, source, subdir=subdir)

    return _add


@pytest.fixture
def scripted():
    """Build a :class:`ScriptedPrompter` from a sequence of answers."""
    return ScriptedPrompter
