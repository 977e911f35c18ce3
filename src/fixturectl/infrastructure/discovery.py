"""Fixture discovery: find the definitions that actually exist.

A definition is a Python file named ``<name><suffix>.py`` under the
namespace directory. Discovery only looks at file names; it never
imports anything (see :mod:`fixturectl.infrastructure.registry`).

Sub-directories are searched when ``recursive`` is on. They are purely
organisational: a fixture's bare name is its file stem minus the suffix,
wherever it lives under the namespace directory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from fnmatch import fnmatchcase
from functools import cached_property
from pathlib import Path

from fixturectl.domain.identifiers import bare_name

DEFINITION_EXTENSION = ".py"

# Directories never searched for definitions.
_SKIP_DIRS = frozenset({"__pycache__", ".git", ".fixturectl"})

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiscoveredFixture:
    """A bare fixture name and the file that defines it."""

    name: str
    path: Path


class FixtureDiscovery:
    """Scan a namespace directory for fixture definition files.

    The directory listing is taken once per instance; build a new
    instance per command.
    """

    def __init__(self, root: Path, *, suffix: str, recursive: bool = True) -> None:
        self.root = root
        self.suffix = suffix
        self.recursive = recursive

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def discover_all(self) -> list[DiscoveredFixture]:
        """Every definition under the namespace, sorted by bare name."""
        found = self._match([f"*{self.suffix}{DEFINITION_EXTENSION}"])
        return sorted(found, key=lambda f: f.name)

    def discover(self, requested: list[str]) -> list[DiscoveredFixture]:
        """Definitions matching *requested* names, in request order.

        Names may contain shell-style wildcards. Names without a matching
        file are left out of the result.
        """
        return self._match([self._pattern(name) for name in requested])

    def missing(self, requested: list[str]) -> list[str]:
        """The requested names that match no definition file."""
        return [
            name
            for name in requested
            if not any(fnmatchcase(p.name, self._pattern(name)) for p in self._candidates)
        ]

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _pattern(self, name: str) -> str:
        return f"{name}{self.suffix}{DEFINITION_EXTENSION}"

    @cached_property
    def _candidates(self) -> list[Path]:
        """All Python files under the namespace, in sorted path order."""
        if not self.root.is_dir():
            logger.debug("Fixture namespace directory does not exist: %s", self.root)
            return []
        pattern = f"*{DEFINITION_EXTENSION}"
        paths = self.root.rglob(pattern) if self.recursive else self.root.glob(pattern)
        results: list[Path] = []
        for path in paths:
            if not path.is_file():
                continue
            relative = path.relative_to(self.root)
            if any(part in _SKIP_DIRS for part in relative.parts[:-1]):
                continue
            results.append(path)
        return sorted(results)

    def _match(self, patterns: list[str]) -> list[DiscoveredFixture]:
        found: dict[str, DiscoveredFixture] = {}
        for pattern in patterns:
            for path in self._candidates:
                if not fnmatchcase(path.name, pattern):
                    continue
                name = bare_name(path.stem, self.suffix)
                if not name:
                    continue
                existing = found.get(name)
                if existing is None:
                    found[name] = DiscoveredFixture(name=name, path=path)
                elif existing.path != path:
                    logger.warning(
                        "Duplicate fixture %r: using %s, ignoring %s",
                        name,
                        existing.path,
                        path,
                    )
        return list(found.values())
