"""Fixture variants shipped with fixturectl.

Definition modules in a project's namespace usually build one of these
from their ``create_fixture(context)`` factory.
"""

from fixturectl.fixtures.init_db_fixture import InitDbFixture
from fixturectl.fixtures.table import TableFixture

__all__ = ["InitDbFixture", "TableFixture"]
