"""SQLAlchemy Core persistence: engine, tables, sequential keys."""
