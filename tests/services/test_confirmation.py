"""Tests for ConfirmationGate and its default collaborators."""

from fixturectl.domain.lifecycle import FixtureAction
from fixturectl.domain.plan import FixturePlan
from fixturectl.services.confirmation import AutoConfirm, ConfirmationGate


def _plan(action: FixtureAction) -> FixturePlan:
    return FixturePlan(action=action, namespace="ns", namespace_dir="/p/ns", fixtures=["A"])


class TestConfirmationGate:
    def test_shows_plan_then_asks(self, reporter, scripted) -> None:
        prompter = scripted(True)
        gate = ConfirmationGate(prompter, reporter)
        assert gate.confirm(_plan(FixtureAction.LOAD))
        assert reporter.kinds == ["plan"]
        assert prompter.questions == ["Load above fixtures?"]

    def test_unload_question(self, scripted) -> None:
        prompter = scripted(False)
        assert not ConfirmationGate(prompter).confirm(_plan(FixtureAction.UNLOAD))
        assert prompter.questions == ["Unload above fixtures?"]

    def test_auto_confirm(self) -> None:
        assert ConfirmationGate(AutoConfirm()).confirm(_plan(FixtureAction.LOAD))
        assert not ConfirmationGate(AutoConfirm(False)).confirm(_plan(FixtureAction.LOAD))
