"""Pluggy hook specifications for fixturectl.

One setup-time hook lets plugins contribute fixtures to the registry;
two notification hooks run after a successful load or unload.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from fixturectl.domain.fixture import FixtureFactory

hookspec = pluggy.HookspecMarker("fixturectl")
hookimpl = pluggy.HookimplMarker("fixturectl")


class FixturectlHookSpec:
    """Hook specifications for the fixturectl plugin system."""

    @hookspec
    def register_fixtures(self) -> dict[str, FixtureFactory] | None:
        """Return identifier -> factory mappings to add to the fixture registry."""

    @hookspec
    def post_load(self, namespace: str, identifiers: list[str]) -> None:
        """Called after fixtures were loaded."""

    @hookspec
    def post_unload(self, namespace: str, identifiers: list[str]) -> None:
        """Called after fixtures were unloaded."""
