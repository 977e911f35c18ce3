"""LifecycleOrchestrator: run unload/load over resolved fixtures, in order.

Load flow:   idle -> resolved -> confirmed -> unloading -> loading -> done
Unload flow: idle -> resolved -> confirmed -> unloading -> done

Every fixture is built once, up front. The load flow unloads every
fixture first and then loads every fixture, both passes in resolved
order (globals first), so repeating a load converges on the same state.

The first failure stops the run. Nothing already done is rolled back;
the raised :class:`FixtureOperationError` lists the completed steps.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, NoReturn

import structlog

from fixturectl.domain.errors import FixtureOperationError
from fixturectl.domain.lifecycle import TRANSITIONS, FixtureAction, Phase, is_valid_transition

if TYPE_CHECKING:
    from fixturectl.domain.fixture import Fixture, FixtureContext
    from fixturectl.infrastructure.registry import FixtureRegistry

log = structlog.get_logger(__name__)

_BUILD = "build"


@dataclass
class OrchestrationReport:
    """Steps performed by one run, in execution order."""

    action: FixtureAction
    steps: list[tuple[str, str]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": str(self.action),
            "steps": [{"identifier": i, "action": a} for i, a in self.steps],
        }


class LifecycleOrchestrator:
    """Drives one load or unload run through its phases."""

    def __init__(
        self,
        registry: FixtureRegistry,
        context_factory: Callable[[], FixtureContext],
        *,
        action: FixtureAction,
    ) -> None:
        self._registry = registry
        self._context_factory = context_factory
        self.action = action
        self.phase = Phase.IDLE
        self.identifiers: list[str] = []
        self._transitions = TRANSITIONS[action]

    # ------------------------------------------------------------------
    # Phase control
    # ------------------------------------------------------------------

    def mark_resolved(self, identifiers: list[str]) -> None:
        self._advance(Phase.RESOLVED)
        self.identifiers = list(identifiers)

    def mark_confirmed(self) -> None:
        self._advance(Phase.CONFIRMED)

    def run(self) -> OrchestrationReport:
        """Execute the flow for the resolved, confirmed identifiers.

        Raises:
            FixtureOperationError: On the first fixture that fails to
                build, unload, or load.
        """
        report = OrchestrationReport(action=self.action)
        self._advance(Phase.UNLOADING)
        fixtures = self._build_all(report)

        for identifier, fixture in fixtures:
            self._step(report, identifier, fixture, FixtureAction.UNLOAD)

        if self.action is FixtureAction.LOAD:
            self._advance(Phase.LOADING)
            for identifier, fixture in fixtures:
                self._step(report, identifier, fixture, FixtureAction.LOAD)

        self._advance(Phase.DONE)
        return report

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _advance(self, target: Phase) -> None:
        if not is_valid_transition(self.phase, target, self._transitions):
            msg = f"Cannot move {self.action} run from {self.phase} to {target}"
            raise ValueError(msg)
        self.phase = target

    def _build_all(self, report: OrchestrationReport) -> list[tuple[str, Fixture]]:
        context = self._context_factory()
        fixtures: list[tuple[str, Fixture]] = []
        for identifier in self.identifiers:
            try:
                fixture = self._registry.get(identifier)(context)
            except Exception as exc:
                self._fail(report, identifier, _BUILD, exc)
            fixtures.append((identifier, fixture))
        return fixtures

    def _step(
        self,
        report: OrchestrationReport,
        identifier: str,
        fixture: Fixture,
        action: FixtureAction,
    ) -> None:
        log.debug(f"fixture.{action}", identifier=identifier)
        try:
            if action is FixtureAction.LOAD:
                fixture.load()
            else:
                fixture.unload()
        except Exception as exc:
            self._fail(report, identifier, str(action), exc)
        report.steps.append((identifier, str(action)))

    def _fail(
        self,
        report: OrchestrationReport,
        identifier: str,
        action: str,
        exc: Exception,
    ) -> NoReturn:
        self.phase = Phase.FAILED
        log.warning("fixture.failed", identifier=identifier, action=action, error=str(exc))
        raise FixtureOperationError(identifier, action, exc, list(report.steps)) from exc
