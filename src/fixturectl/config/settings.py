"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``FIXTURECTL_*`` prefix
  3. TOML file    — ``fixturectl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the walk-up discovery from :mod:`fixturectl.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any, ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from fixturectl.config.discovery import find_config
from fixturectl.config.models import (
    DatabaseConfig,
    FixturesConfig,
    PluginsConfig,
    UploadConfig,
)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``fixturectl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class FixtureSettings(BaseSettings):
    """Unified settings for the fixturectl CLI.

    Stored on the :class:`~fixturectl.commands._context.AppContext` at the
    CLI root and handed to the environment.

    Attributes:
        project_root: Directory namespaces are resolved against (parent of
            ``fixturectl.toml``, or CWD if no config found).
        config_path: The config file in use, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FIXTURECTL_",
        "env_nested_delimiter": "__",
    }

    # --- Resolved path (derived from the config location, never read from TOML) ---
    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False

    # --- TOML sections ---
    fixtures: FixturesConfig = Field(default_factory=FixturesConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    # Retained for type-checker visibility; not used at runtime.
    _toml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> FixtureSettings:
        """Construct settings from CLI invocation.

        Discovers ``fixturectl.toml`` via walk-up (or explicit *config_path*),
        resolves *project_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(project_root)

        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

    def with_fixture_overrides(
        self,
        *,
        namespace: str | None = None,
        global_fixtures: list[str] | None = None,
    ) -> FixtureSettings:
        """Return a copy with per-command ``--namespace`` / ``--global-fixtures`` applied."""
        changes: dict[str, Any] = {}
        if namespace is not None:
            changes["namespace"] = namespace.strip(".")
        if global_fixtures is not None:
            changes["global_fixtures"] = global_fixtures
        if not changes:
            return self
        fixtures = self.fixtures.model_copy(update=changes)
        return self.model_copy(update={"fixtures": fixtures})

    @property
    def database_url(self) -> str:
        """Configured database URL, defaulting to a SQLite file in the project."""
        if self.database.url:
            return self.database.url
        return f"sqlite:///{self.project_root / '.fixturectl' / 'fixtures.db'}"
