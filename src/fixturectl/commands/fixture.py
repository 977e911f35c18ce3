"""Command group: load and unload fixtures (``load`` is the default)."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import click

from fixturectl.commands._base import DefaultCommandGroup

if TYPE_CHECKING:
    from fixturectl.commands._context import AppContext
    from fixturectl.services.fixtures import FixtureService
    from fixturectl.services.result import ServiceResult

_FIXTURE_EXAMPLES = """\
  fixturectl fixture User                      # same as: fixture load User
  fixturectl fixture load User UserProfile
  fixturectl fixture load "*"
  fixturectl fixture load "*" -User -UserProfile
  fixturectl fixture load User --namespace app.tests.fixtures
  fixturectl fixture unload "*" --global-fixtures ""
  fixturectl fixture list"""

# Exclusion tokens such as ``-User`` look like options to click.
_NAME_CONTEXT = {"ignore_unknown_options": True}


def _fixture_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Shared ``NAMES... --namespace --global-fixtures`` interface."""
    func = click.option(
        "--global-fixtures",
        "--globalFixtures",
        "global_fixtures",
        default=None,
        metavar="LIST",
        help="Comma-separated fixtures always applied first (\"\" for none).",
    )(func)
    func = click.option(
        "--namespace",
        default=None,
        help="Dotted namespace to search fixtures in.",
    )(func)
    func = click.argument("names", nargs=-1, type=click.UNPROCESSED)(func)
    return func


@click.group(cls=DefaultCommandGroup, default_command="load", examples=_FIXTURE_EXAMPLES)
def fixture() -> None:
    """Manage fixture data loading and unloading."""


@fixture.command(
    context_settings=_NAME_CONTEXT,
    examples="""\
  fixturectl fixture load User
  fixturectl fixture load "*"
  fixturectl fixture load "*" -User
  fixturectl --no-interact fixture load User UserProfile""",
)
@_fixture_options
@click.pass_context
def load(
    ctx: click.Context,
    names: tuple[str, ...],
    namespace: str | None,
    global_fixtures: str | None,
) -> None:
    """Load fixtures by NAMES; existing fixture data is removed first.

    Use "*" for every fixture in the namespace and -NAME to exclude one.
    """
    _run(ctx, lambda svc: svc.load(list(names)), namespace, global_fixtures)


@fixture.command(
    context_settings=_NAME_CONTEXT,
    examples="""\
  fixturectl fixture unload User
  fixturectl fixture unload "*"
  fixturectl fixture unload "*" -User""",
)
@_fixture_options
@click.pass_context
def unload(
    ctx: click.Context,
    names: tuple[str, ...],
    namespace: str | None,
    global_fixtures: str | None,
) -> None:
    """Unload fixtures by NAMES.

    Use "*" for every fixture in the namespace and -NAME to exclude one.
    """
    _run(ctx, lambda svc: svc.unload(list(names)), namespace, global_fixtures)


@fixture.command("list", examples="  fixturectl fixture list\n  fixturectl -v fixture list")
@click.option("--namespace", default=None, help="Dotted namespace to search fixtures in.")
@click.pass_obj
def list_cmd(app: AppContext, namespace: str | None) -> None:
    """List the fixtures found under the namespace."""
    from fixturectl.services.fixtures import FixtureService

    app.override_fixtures(namespace=namespace)
    app.emit(FixtureService(app.env).list_fixtures())


def _run(
    ctx: click.Context,
    call: Callable[[FixtureService], ServiceResult],
    namespace: str | None,
    global_fixtures: str | None,
) -> None:
    from fixturectl.domain.errors import Notice
    from fixturectl.services._helpers import parse_name_list
    from fixturectl.services.fixtures import FixtureService

    app: AppContext = ctx.obj
    app.override_fixtures(namespace=namespace, global_fixtures=parse_name_list(global_fixtures))
    result = call(FixtureService(app.env, gate=app.confirmation_gate()))

    if result.status == Notice.EMPTY_INPUT and not app.settings.json_output:
        click.echo(ctx.get_help())
        click.echo(f"\nUse {ctx.command_path} --examples to see usage examples.")
        return
    app.emit(result)
