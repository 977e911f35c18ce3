"""Fixture registry: identifier to factory mapping.

Identifiers are resolved against this registry instead of being looked
up as symbols at runtime. It is filled from two places:

* plugins implementing ``register_fixtures`` (built-ins and entry points),
* definition files found by discovery, loaded as standalone modules.

A definition module exposes either a module-level ``create_fixture``
callable or one class, defined in that module, with callable ``load``
and ``unload`` methods. Import errors are logged as warnings and leave
the identifier unregistered, so it resolves as missing instead of
aborting the command.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from collections.abc import Iterator
from pathlib import Path
from types import ModuleType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fixturectl.domain.fixture import FixtureFactory

FACTORY_ATTRIBUTE = "create_fixture"
_MODULE_PREFIX = "fixturectl_definition_"

logger = logging.getLogger(__name__)


class FixtureRegistry:
    """Maps fully-qualified identifiers to fixture factories."""

    def __init__(self) -> None:
        self._factories: dict[str, FixtureFactory] = {}

    def register(self, identifier: str, factory: FixtureFactory) -> None:
        """Register *factory* under *identifier*, replacing any previous one."""
        if not callable(factory):
            msg = f"Fixture factory for {identifier!r} is not callable"
            raise TypeError(msg)
        if identifier in self._factories:
            logger.debug("Replacing fixture factory for %s", identifier)
        self._factories[identifier] = factory

    def get(self, identifier: str) -> FixtureFactory:
        """Return the factory for *identifier*.

        Raises:
            KeyError: If nothing is registered under *identifier*.
        """
        return self._factories[identifier]

    def identifiers(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(self.identifiers())

    def __len__(self) -> int:
        return len(self._factories)

    # ------------------------------------------------------------------
    # Definition files
    # ------------------------------------------------------------------

    def register_file(self, identifier: str, path: Path) -> bool:
        """Load the definition module at *path* and register its factory.

        Returns True when a factory was registered. Identifiers already
        registered (by a plugin or an earlier call) are left untouched.
        """
        if identifier in self._factories:
            return True

        module = _load_module(identifier, path)
        if module is None:
            return False

        factory = _find_factory(module)
        if factory is None:
            logger.warning(
                "Fixture module %s defines neither %s() nor a class with load/unload",
                path,
                FACTORY_ATTRIBUTE,
            )
            return False

        self.register(identifier, factory)
        logger.debug("Registered fixture %s from %s", identifier, path)
        return True


def _load_module(identifier: str, path: Path) -> ModuleType | None:
    """Execute *path* as a standalone module; None (and a warning) on failure."""
    module_name = _MODULE_PREFIX + identifier.replace(".", "_")
    try:
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            logger.warning("Could not create module spec for %s", path)
            return None
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
    except Exception:
        logger.warning("Failed to load fixture module %s", path, exc_info=True)
        # Clean up partial module registration
        sys.modules.pop(module_name, None)
        return None
    return module


def _find_factory(module: ModuleType) -> FixtureFactory | None:
    factory = getattr(module, FACTORY_ATTRIBUTE, None)
    if callable(factory):
        return factory

    for _attr_name, obj in inspect.getmembers(module, inspect.isclass):
        if obj.__module__ != module.__name__:
            continue  # skip imported classes
        if _is_fixture_class(obj):
            return obj
    return None


def _is_fixture_class(cls: type) -> bool:
    return callable(getattr(cls, "load", None)) and callable(getattr(cls, "unload", None))
