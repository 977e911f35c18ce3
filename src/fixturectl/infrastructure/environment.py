"""FixtureEnvironment: the single dependency injected into every service.

Owns the resolved settings, the backend engine (created lazily), the
plugin manager and the fixture registry. One environment lives for one
CLI invocation; :meth:`close` disposes the engine.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fixturectl.domain.fixture import FixtureContext
from fixturectl.domain.identifiers import namespace_path
from fixturectl.infrastructure.database.engine import create_db_engine
from fixturectl.infrastructure.discovery import FixtureDiscovery
from fixturectl.infrastructure.registry import FixtureRegistry
from fixturectl.plugins.manager import PluginManager

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from fixturectl.config.settings import FixtureSettings

logger = logging.getLogger(__name__)


class FixtureEnvironment:
    """Settings, backend, plugins and registry for one command run."""

    def __init__(
        self,
        settings: FixtureSettings,
        *,
        engine: Engine | None = None,
        plugin_manager: PluginManager | None = None,
    ) -> None:
        self.settings = settings
        self._engine = engine
        self._owns_engine = engine is None
        self._plugins = plugin_manager
        self._registry: FixtureRegistry | None = None

    # ------------------------------------------------------------------
    # Lazily built collaborators
    # ------------------------------------------------------------------

    @property
    def engine(self) -> Engine:
        """Backend engine (created on first access)."""
        if self._engine is None:
            self._engine = create_db_engine(
                self.settings.database_url,
                echo=self.settings.database.echo,
            )
        return self._engine

    @property
    def plugins(self) -> PluginManager:
        """Plugin manager with built-in and entry-point plugins loaded."""
        if self._plugins is None:
            self._plugins = PluginManager()
        if not self._plugins.is_loaded:
            names = self._plugins.discover_and_load(
                entry_points=self.settings.plugins.entry_points,
            )
            logger.debug("Loaded plugins: %s", ", ".join(names))
        return self._plugins

    @property
    def registry(self) -> FixtureRegistry:
        """Fixture registry seeded with plugin-provided fixtures."""
        if self._registry is None:
            self._registry = FixtureRegistry()
            self.plugins.collect_fixtures(self._registry)
        return self._registry

    # ------------------------------------------------------------------
    # Namespace helpers
    # ------------------------------------------------------------------

    @property
    def namespace(self) -> str:
        return self.settings.fixtures.namespace

    @property
    def namespace_dir(self) -> Path:
        """Directory the configured namespace maps to."""
        return namespace_path(self.settings.project_root, self.namespace)

    def discovery(self) -> FixtureDiscovery:
        """A fresh discovery scanner for the configured namespace."""
        return FixtureDiscovery(
            self.namespace_dir,
            suffix=self.settings.fixtures.suffix,
            recursive=self.settings.fixtures.recursive,
        )

    def fixture_context(self) -> FixtureContext:
        """Context handed to every fixture factory."""
        return FixtureContext(
            engine=self.engine,
            namespace=self.namespace,
            namespace_dir=self.namespace_dir,
            options={"init_script": self.settings.fixtures.init_script},
        )

    def close(self) -> None:
        """Dispose the engine if this environment created it."""
        if self._engine is not None and self._owns_engine:
            self._engine.dispose()
            self._engine = None
