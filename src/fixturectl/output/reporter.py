"""ConsoleReporter and ClickPrompter: the CLI's console collaborators.

The reporter writes plan listings and notices as they happen (before the
final result is emitted). In ``--json`` mode it writes to stderr so
stdout stays a single JSON document; in ``--quiet`` mode only the plan
is shown, because the operator still has to answer the prompt.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from fixturectl.output.renderers import (
    render_not_found,
    render_nothing_to_process,
    render_plan,
    render_unresolved,
)

if TYPE_CHECKING:
    from fixturectl.domain.plan import FixturePlan


class ConsoleReporter:
    """Writes fixture notices to the terminal via click."""

    def __init__(self, *, quiet: bool = False, to_stderr: bool = False) -> None:
        self.quiet = quiet
        self.to_stderr = to_stderr

    def show_plan(self, plan: FixturePlan) -> None:
        self._write(render_plan(plan))

    def notify_not_found(self, plan: FixturePlan) -> None:
        if not self.quiet:
            self._write(render_not_found(plan), err=True)

    def notify_unresolved(self, plan: FixturePlan) -> None:
        if not self.quiet:
            self._write(render_unresolved(plan), err=True)

    def notify_nothing_to_process(self, plan: FixturePlan, found: list[str]) -> None:
        if not self.quiet:
            self._write(render_nothing_to_process(plan, found))

    def _write(self, text: str, *, err: bool = False) -> None:
        click.echo(text + "\n", err=err or self.to_stderr)


class ClickPrompter:
    """Interactive yes/no prompt; the default answer is no."""

    def confirm(self, question: str) -> bool:
        return click.confirm(question, default=False, err=True)
