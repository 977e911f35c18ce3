"""SQLAlchemy Core table definitions for the upload collaborator.

Fixture tables belong to the project under test and are never declared
here; fixtures reflect them at runtime.
"""

from __future__ import annotations

from sqlalchemy import Column, Integer, MetaData, Table, Text

upload_metadata = MetaData()

id_counters = Table(
    "id_counters",
    upload_metadata,
    Column("name", Text, primary_key=True),
    Column("next_value", Integer, nullable=False),
)

uploads = Table(
    "uploads",
    upload_metadata,
    Column("key", Integer, primary_key=True, autoincrement=False),
    Column("path", Text, nullable=False, unique=True),
    Column("filename", Text, nullable=False),
    Column("team", Text, nullable=False),
    Column("uploaded_by", Text, nullable=False),
    Column("uploaded_at", Text, nullable=False),
)
