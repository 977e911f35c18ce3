"""Database engine setup.

The engine is the backend fixtures mutate. SQLAlchemy Core (not ORM) is
used because fixturectl is a short-lived CLI process: no benefit from
session management or identity maps.

SQLite URLs get ``foreign_keys=ON`` on every connection and their parent
directory created on demand.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event, insert, select
from sqlalchemy.engine import Engine, make_url

from fixturectl.infrastructure.database.schema import id_counters, upload_metadata

UPLOAD_COUNTER = "upload"


def create_db_engine(url: str, *, echo: bool = False) -> Engine:
    """Create an engine for *url*; SQLite gets foreign keys enabled."""
    parsed = make_url(url)
    is_sqlite = parsed.get_backend_name() == "sqlite"
    if is_sqlite and parsed.database and parsed.database != ":memory:":
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url, echo=echo)

    if is_sqlite:

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def init_upload_schema(engine: Engine) -> None:
    """Create the upload bookkeeping tables and seed the upload counter.

    Idempotent, so it runs on every upload.
    """
    upload_metadata.create_all(engine)
    with engine.begin() as conn:
        row = conn.execute(
            select(id_counters.c.name).where(id_counters.c.name == UPLOAD_COUNTER)
        ).first()
        if row is None:
            conn.execute(insert(id_counters).values(name=UPLOAD_COUNTER, next_value=1))

