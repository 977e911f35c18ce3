"""Custom Click base classes with --examples support and a default sub-command.

Provides FixtureCommand and FixtureGroup that accept an ``examples``
parameter. When ``--examples`` is passed, the command prints usage
examples and exits. DefaultCommandGroup additionally routes arguments
that do not name a sub-command to a default one, so ``fixturectl
fixture User`` means ``fixturectl fixture load User``.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command | click.Group, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class FixtureCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class FixtureGroup(click.Group):
    """Click Group subclass that supports an ``--examples`` flag.

    Sets ``command_class = FixtureCommand`` so all subcommands automatically
    accept the ``examples`` parameter without explicit ``cls=`` each time.
    """

    command_class = FixtureCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class DefaultCommandGroup(FixtureGroup):
    """FixtureGroup that falls back to *default_command*.

    Arguments are routed to the default sub-command unless the first one
    names a sub-command or one of the group's own options.
    """

    def __init__(self, *args: Any, default_command: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.default_command = default_command

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        if self.default_command is not None and not self._starts_with_known(ctx, args):
            args = [self.default_command, *args]
        return super().parse_args(ctx, args)

    def _starts_with_known(self, ctx: click.Context, args: list[str]) -> bool:
        if not args:
            return False
        first = args[0]
        if first in self.commands:
            return True
        own_options = {opt for param in self.get_params(ctx) for opt in param.opts}
        return first.split("=", 1)[0] in own_options
