"""InitDbFixture: the default global fixture.

Runs the namespace's init script (``initdb.sql`` unless configured
otherwise) before any other fixture is loaded. Typical scripts create
tables or reset sequences. Unloading is a no-op.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fixturectl.domain.fixture import FixtureContext

IDENTIFIER = "fixturectl.fixtures.init_db_fixture"
DEFAULT_INIT_SCRIPT = "initdb.sql"

logger = logging.getLogger(__name__)


class InitDbFixture:
    """Execute the namespace init script, if there is one."""

    def __init__(self, context: FixtureContext) -> None:
        self.context = context
        script = context.options.get("init_script") or DEFAULT_INIT_SCRIPT
        self.script_path = context.namespace_dir / script

    def load(self) -> None:
        if not self.script_path.is_file():
            logger.debug("No init script at %s", self.script_path)
            return
        statements = split_statements(self.script_path.read_text(encoding="utf-8"))
        with self.context.engine.begin() as conn:
            for statement in statements:
                conn.exec_driver_sql(statement)
        logger.debug("Ran %d init statements from %s", len(statements), self.script_path)

    def unload(self) -> None:
        pass


def split_statements(script: str) -> list[str]:
    """Split a SQL script on ``;``, dropping blanks and ``--`` comment lines."""
    lines = [line for line in script.splitlines() if not line.lstrip().startswith("--")]
    return [part.strip() for part in "\n".join(lines).split(";") if part.strip()]
