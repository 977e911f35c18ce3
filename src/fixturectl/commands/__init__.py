"""Subcommand modules for fixturectl.

Provides register_commands() which uses deferred imports to keep
``fixturectl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``fixture`` group and the upload commands on the root group."""
    from fixturectl.commands.fixture import fixture
    from fixturectl.commands.upload import upload, uploads

    cli.add_command(fixture)
    cli.add_command(upload)
    cli.add_command(uploads)
