"""Commands: upload a source file and list recorded uploads."""

from __future__ import annotations

import getpass
from pathlib import Path
from typing import TYPE_CHECKING

import click

from fixturectl.commands._base import FixtureCommand

if TYPE_CHECKING:
    from fixturectl.commands._context import AppContext


@click.command(
    cls=FixtureCommand,
    examples="""\
  fixturectl upload solution.cpp --team red
  fixturectl upload main.c --team blue --uploaded-by alice
  fixturectl --json upload main.c --team blue""",
)
@click.argument("source", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--team", required=True, help="Team the upload belongs to.")
@click.option(
    "--uploaded-by",
    default=None,
    help="Uploader name (defaults to the current user).",
)
@click.pass_obj
def upload(app: AppContext, source: Path, team: str, uploaded_by: str | None) -> None:
    """Store SOURCE under the next sequential key and record who uploaded it."""
    from fixturectl.services.upload import UploadService

    app.emit(
        UploadService(app.env).upload(
            source,
            team=team,
            uploaded_by=uploaded_by or getpass.getuser(),
        )
    )


@click.command(cls=FixtureCommand, examples="  fixturectl uploads\n  fixturectl --json uploads")
@click.pass_obj
def uploads(app: AppContext) -> None:
    """List recorded uploads."""
    from fixturectl.services.upload import UploadService

    app.emit(UploadService(app.env).list_uploads())
