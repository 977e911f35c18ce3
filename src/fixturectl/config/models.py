"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, fixturectl.toml only contains
overrides. A project that keeps its fixtures under ``tests/fixtures``
needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

# --- fixturectl.toml sections ---


class FixturesConfig(BaseModel):
    """[fixtures] section."""

    model_config = {"frozen": True}

    namespace: str = "tests.fixtures"
    global_fixtures: list[str] = Field(default_factory=lambda: ["fixturectl.fixtures.init_db"])
    suffix: str = "_fixture"
    recursive: bool = True
    init_script: str = "initdb.sql"

    @field_validator("namespace")
    @classmethod
    def _strip_separators(cls, value: str) -> str:
        return value.strip(".")


class DatabaseConfig(BaseModel):
    """[database] section.

    ``url`` of None means a SQLite file at ``.fixturectl/fixtures.db``
    under the project root.
    """

    model_config = {"frozen": True}

    url: str | None = None
    echo: bool = False


class UploadConfig(BaseModel):
    """[upload] section."""

    model_config = {"frozen": True}

    directory: str = "uploads"
    extensions: list[str] = Field(default_factory=lambda: ["c", "cpp"])
    max_size: int = 1024 * 1024


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    entry_points: bool = True
