"""Built-in plugin that registers the fixtures shipped with fixturectl."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fixturectl.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from fixturectl.domain.fixture import FixtureFactory


class CorePlugin:
    """Registers :class:`~fixturectl.fixtures.init_db_fixture.InitDbFixture`."""

    @hookimpl
    def register_fixtures(self) -> dict[str, FixtureFactory]:
        from fixturectl.fixtures.init_db_fixture import IDENTIFIER, InitDbFixture

        return {IDENTIFIER: InitDbFixture}
