"""Tests for the engine, upload schema and sequential keys."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import inspect, select, text

from fixturectl.infrastructure.database.counters import next_sequential_key
from fixturectl.infrastructure.database.engine import (
    UPLOAD_COUNTER,
    create_db_engine,
    init_upload_schema,
)
from fixturectl.infrastructure.database.schema import id_counters


@pytest.fixture
def db(tmp_path: Path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'nested' / 'fixtures.db'}")
    yield engine
    engine.dispose()


class TestEngine:
    def test_creates_parent_directory(self, db, tmp_path: Path) -> None:
        with db.connect() as conn:
            conn.execute(text("SELECT 1"))
        assert (tmp_path / "nested" / "fixtures.db").exists()

    def test_foreign_keys_enabled(self, db) -> None:
        with db.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1

    def test_memory_url(self) -> None:
        engine = create_db_engine("sqlite:///:memory:")
        with engine.connect() as conn:
            assert conn.execute(text("SELECT 1")).scalar() == 1
        engine.dispose()


class TestUploadSchema:
    def test_creates_tables_and_seeds_counter(self, db) -> None:
        init_upload_schema(db)
        names = set(inspect(db).get_table_names())
        assert {"id_counters", "uploads"} <= names
        with db.connect() as conn:
            value = conn.execute(
                select(id_counters.c.next_value).where(id_counters.c.name == UPLOAD_COUNTER)
            ).scalar()
        assert value == 1

    def test_idempotent(self, db) -> None:
        init_upload_schema(db)
        with db.begin() as conn:
            next_sequential_key(conn, UPLOAD_COUNTER)
        init_upload_schema(db)
        with db.begin() as conn:
            assert next_sequential_key(conn, UPLOAD_COUNTER) == 2


class TestSequentialKeys:
    def test_increments(self, db) -> None:
        init_upload_schema(db)
        with db.begin() as conn:
            keys = [next_sequential_key(conn, UPLOAD_COUNTER) for _ in range(3)]
        assert keys == [1, 2, 3]

    def test_rollback_releases_key(self, db) -> None:
        init_upload_schema(db)
        with pytest.raises(RuntimeError), db.begin() as conn:
            next_sequential_key(conn, UPLOAD_COUNTER)
            raise RuntimeError("abort")
        with db.begin() as conn:
            assert next_sequential_key(conn, UPLOAD_COUNTER) == 1

    def test_unknown_counter(self, db) -> None:
        init_upload_schema(db)
        with db.begin() as conn, pytest.raises(ValueError, match="Unknown sequential counter"):
            next_sequential_key(conn, "nope")
