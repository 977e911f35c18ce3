"""TableFixture: seed rows into one database table.

``unload()`` empties the table and ``load()`` inserts the rows, so a
load (which always unloads first) leaves exactly the fixture rows
behind no matter how often it runs. The table itself belongs to the
project under test and is reflected, never created.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from sqlalchemy import MetaData, Table, delete, insert, inspect

if TYPE_CHECKING:
    from sqlalchemy import Connection

    from fixturectl.domain.fixture import FixtureContext

logger = logging.getLogger(__name__)


class TableFixture:
    """Rows for a single table."""

    def __init__(
        self,
        context: FixtureContext,
        table: str,
        rows: list[dict[str, Any]] | None = None,
    ) -> None:
        self.context = context
        self.table = table
        self.rows = list(rows or [])

    @classmethod
    def from_json(cls, context: FixtureContext, table: str, path: str | Path) -> TableFixture:
        """Build a fixture whose rows come from a JSON array file.

        Relative paths are resolved against the namespace directory.
        """
        data_path = Path(path)
        if not data_path.is_absolute():
            data_path = context.namespace_dir / data_path
        rows = json.loads(data_path.read_text(encoding="utf-8"))
        if not isinstance(rows, list):
            msg = f"Fixture data in {data_path} must be a JSON array of objects"
            raise ValueError(msg)
        return cls(context, table, rows)

    def load(self) -> None:
        if not self.rows:
            return
        with self.context.engine.begin() as conn:
            table = self._reflect(conn)
            if table is None:
                msg = f"Table {self.table!r} does not exist"
                raise LookupError(msg)
            conn.execute(insert(table), self.rows)
        logger.debug("Inserted %d rows into %s", len(self.rows), self.table)

    def unload(self) -> None:
        with self.context.engine.begin() as conn:
            table = self._reflect(conn)
            if table is None:
                return
            conn.execute(delete(table))

    def _reflect(self, conn: Connection) -> Table | None:
        if not inspect(conn).has_table(self.table):
            return None
        return Table(self.table, MetaData(), autoload_with=conn)

    def __repr__(self) -> str:
        return f"TableFixture(table={self.table!r}, rows={len(self.rows)})"
