"""ConfigResolver: turn names into loadable fixture identifiers.

Globals come first, then the requested names. Each name is qualified
with the namespace and suffix; identifiers the registry does not know
are dropped and reported back as unresolved. Dropping is never fatal on
its own, only an empty final list is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from fixturectl.domain.errors import ResolutionEmptyError
from fixturectl.domain.identifiers import qualify

if TYPE_CHECKING:
    from fixturectl.infrastructure.registry import FixtureRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Ordered identifiers to act on, plus the ones that were dropped."""

    identifiers: list[str] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)


class ConfigResolver:
    """Qualifies names against one namespace and checks them in a registry."""

    def __init__(self, registry: FixtureRegistry, *, namespace: str, suffix: str) -> None:
        self._registry = registry
        self.namespace = namespace
        self.suffix = suffix

    def qualify(self, name: str) -> str:
        return qualify(name, namespace=self.namespace, suffix=self.suffix)

    def resolve(self, names: list[str], global_fixtures: list[str]) -> Resolution:
        """Resolve ``global_fixtures + names`` to registered identifiers.

        Raises:
            ResolutionEmptyError: If there was something to resolve but
                none of it is registered.
        """
        candidates = [*global_fixtures, *names]
        identifiers: list[str] = []
        unresolved: list[str] = []
        for name in candidates:
            identifier = self.qualify(name)
            if identifier in identifiers or identifier in unresolved:
                continue
            if identifier in self._registry:
                identifiers.append(identifier)
            else:
                logger.debug("Fixture %s does not resolve to a definition", identifier)
                unresolved.append(identifier)

        if candidates and not identifiers:
            raise ResolutionEmptyError(self.namespace, unresolved)
        return Resolution(identifiers=identifiers, unresolved=unresolved)
