"""Infrastructure layer: database, fixture discovery, registry, file storage.

This layer depends on stdlib and third-party libs (SQLAlchemy, pluggy).
It must never import from services, commands, or output.
"""
