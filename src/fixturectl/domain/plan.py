"""FixturePlan: what a load or unload command is about to do."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fixturectl.domain.lifecycle import FixtureAction


@dataclass(frozen=True)
class FixturePlan:
    """Resolved, not yet confirmed, set of fixtures for one command.

    Attributes:
        action: Load or unload.
        namespace: Dotted namespace searched.
        namespace_dir: Directory the namespace maps to.
        global_fixtures: Configured globals, as given.
        fixtures: Bare names to apply (found minus excluded).
        excluded: Bare names the operator excluded.
        not_found: Requested names with no definition file.
        identifiers: Resolved identifiers in execution order (globals first).
        unresolved: Identifiers dropped because nothing is registered for them.
    """

    action: FixtureAction
    namespace: str
    namespace_dir: str
    global_fixtures: list[str] = field(default_factory=list)
    fixtures: list[str] = field(default_factory=list)
    excluded: list[str] = field(default_factory=list)
    not_found: list[str] = field(default_factory=list)
    identifiers: list[str] = field(default_factory=list)
    unresolved: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": str(self.action),
            "namespace": self.namespace,
            "namespace_dir": self.namespace_dir,
            "global_fixtures": list(self.global_fixtures),
            "fixtures": list(self.fixtures),
            "excluded": list(self.excluded),
            "not_found": list(self.not_found),
            "identifiers": list(self.identifiers),
            "unresolved": list(self.unresolved),
        }
