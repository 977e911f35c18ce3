"""ConfirmationGate and the console collaborators it talks through.

The gate is the last step before anything is mutated: it shows the plan
through a :class:`Reporter` and asks a :class:`Prompter` for a yes/no.
Both are protocols so services run without a terminal; the CLI supplies
click/Rich backed implementations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from fixturectl.domain.lifecycle import FixtureAction

if TYPE_CHECKING:
    from fixturectl.domain.plan import FixturePlan

_QUESTIONS: dict[FixtureAction, str] = {
    FixtureAction.LOAD: "Load above fixtures?",
    FixtureAction.UNLOAD: "Unload above fixtures?",
}


class Prompter(Protocol):
    """Asks the operator a yes/no question."""

    def confirm(self, question: str) -> bool: ...


class Reporter(Protocol):
    """Writes progress and notices for the operator."""

    def show_plan(self, plan: FixturePlan) -> None: ...

    def notify_not_found(self, plan: FixturePlan) -> None: ...

    def notify_unresolved(self, plan: FixturePlan) -> None: ...

    def notify_nothing_to_process(self, plan: FixturePlan, found: list[str]) -> None: ...


class AutoConfirm:
    """Prompter that answers every question the same way (non-interactive runs)."""

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer

    def confirm(self, question: str) -> bool:
        return self.answer


class NullReporter:
    """Reporter that discards everything."""

    def show_plan(self, plan: FixturePlan) -> None:
        pass

    def notify_not_found(self, plan: FixturePlan) -> None:
        pass

    def notify_unresolved(self, plan: FixturePlan) -> None:
        pass

    def notify_nothing_to_process(self, plan: FixturePlan, found: list[str]) -> None:
        pass


class ConfirmationGate:
    """Show the plan, then block on the operator's answer."""

    def __init__(self, prompter: Prompter, reporter: Reporter | None = None) -> None:
        self.prompter = prompter
        self.reporter: Reporter = reporter or NullReporter()

    def confirm(self, plan: FixturePlan) -> bool:
        """True when the operator approved *plan*."""
        self.reporter.show_plan(plan)
        return self.prompter.confirm(_QUESTIONS[plan.action])
