"""Plugin discovery and loading.

Discovery: entry points (pip-installed) in the ``fixturectl.plugins``
group via pluggy, plus built-in plugins registered directly.
Capabilities: fixture registration and post-load/unload notifications.
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING

import pluggy

from fixturectl.plugins.hookspecs import FixturectlHookSpec

if TYPE_CHECKING:
    from fixturectl.infrastructure.registry import FixtureRegistry

PROJECT_NAME = "fixturectl"
ENTRY_POINT_GROUP = "fixturectl.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(FixturectlHookSpec)
        self._loaded: bool = False

    def discover_and_load(self, *, entry_points: bool = True) -> list[str]:
        """Register built-in plugins and, optionally, entry-point plugins.

        Returns a list of loaded plugin names.
        """
        from fixturectl.plugins.builtins.core import CorePlugin

        if self._pm.get_plugin("core") is None:
            self.register_plugin(CorePlugin(), name="core")
        if entry_points:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
            self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly (e.g. built-in plugins)."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay for dispatching events."""
        return self._pm.hook

    def get_plugins(self) -> list[object]:
        """Return all registered plugins."""
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Fixture registration
    # ------------------------------------------------------------------

    def collect_fixtures(self, registry: FixtureRegistry) -> int:
        """Add every plugin-provided fixture factory to *registry*.

        Returns the number of factories registered. A plugin that raises
        or returns something other than a dict is skipped with a warning.
        """
        count = 0
        for plugin in self._pm.get_plugins():
            plugin_name = self._pm.get_name(plugin) or plugin.__class__.__name__
            hook = getattr(plugin, "register_fixtures", None)
            if hook is None:
                continue

            try:
                factories = hook()
            except Exception:
                logger.warning(
                    "Failed to collect fixtures from plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            if factories is None:
                continue
            if not isinstance(factories, dict):
                logger.warning("Plugin %s returned non-dict fixture registrations", plugin_name)
                continue

            for identifier, factory in factories.items():
                try:
                    registry.register(identifier, factory)
                except TypeError:
                    logger.warning(
                        "Skipping fixture registration %r from plugin %s",
                        identifier,
                        plugin_name,
                        exc_info=True,
                    )
                    continue
                count += 1
        return count

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Hook dispatch
        against class objects leaves ``self`` unbound and fails at runtime.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``.

        Pluggy's ``HookimplMarker("fixturectl")`` sets a ``fixturectl_impl``
        attribute on decorated methods.
        """
        for name in dir(cls):
            if name.startswith("_"):
                continue
            method = getattr(cls, name, None)
            if callable(method) and getattr(method, "fixturectl_impl", None):
                return True
        return False
