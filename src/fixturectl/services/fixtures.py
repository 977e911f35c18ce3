"""FixtureService: the load and unload commands.

Pipeline: FILTER -> DISCOVER -> EXCLUDE -> RESOLVE -> CONFIRM -> ORCHESTRATE

* FILTER splits tokens into apply/except names.
* DISCOVER finds definitions for the apply names (all of them for ``*``
  or when only exclusions were given); missing names become warnings.
* EXCLUDE removes the except names; an empty remainder is a notice.
* RESOLVE prepends globals, qualifies, and drops unregistered identifiers.
* CONFIRM asks the operator; declining is a notice.
* ORCHESTRATE unloads (and for load, then loads) in resolved order.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any

import structlog

from fixturectl.domain.errors import (
    FixtureError,
    FixtureNotFoundError,
    Notice,
    ResolutionEmptyError,
)
from fixturectl.domain.identifiers import is_namespaced, namespace_path
from fixturectl.domain.lifecycle import FixtureAction
from fixturectl.domain.names import filter_names, is_wildcard, subtract
from fixturectl.domain.plan import FixturePlan
from fixturectl.infrastructure.discovery import DEFINITION_EXTENSION
from fixturectl.services.base import BaseService
from fixturectl.services.confirmation import AutoConfirm, ConfirmationGate, NullReporter
from fixturectl.services.orchestrator import LifecycleOrchestrator
from fixturectl.services.resolver import ConfigResolver
from fixturectl.services.result import ServiceResult

if TYPE_CHECKING:
    from pathlib import Path

    from fixturectl.infrastructure.discovery import DiscoveredFixture, FixtureDiscovery
    from fixturectl.infrastructure.environment import FixtureEnvironment
    from fixturectl.services.confirmation import Reporter

log = structlog.get_logger(__name__)

_DONE_STATUS: dict[FixtureAction, str] = {
    FixtureAction.LOAD: "loaded",
    FixtureAction.UNLOAD: "unloaded",
}


class FixtureService(BaseService):
    """Loads and unloads fixtures for the environment's namespace.

    Without a *gate*, every plan is confirmed automatically.
    """

    def __init__(
        self,
        env: FixtureEnvironment,
        *,
        gate: ConfirmationGate | None = None,
        reporter: Reporter | None = None,
    ) -> None:
        super().__init__(env)
        if reporter is None:
            reporter = gate.reporter if gate is not None else NullReporter()
        self._reporter: Reporter = reporter
        self._gate = gate or ConfirmationGate(AutoConfirm(), reporter)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load(self, tokens: list[str]) -> ServiceResult:
        """Unload, then load, the fixtures selected by *tokens*."""
        return self._run(FixtureAction.LOAD, tokens)

    def unload(self, tokens: list[str]) -> ServiceResult:
        """Unload the fixtures selected by *tokens*."""
        return self._run(FixtureAction.UNLOAD, tokens)

    def list_fixtures(self) -> ServiceResult:
        """Every definition under the namespace and whether it is loadable."""
        op = "list"
        resolver = self._resolver()
        items: list[dict[str, Any]] = []
        for found in self._env.discovery().discover_all():
            identifier = resolver.qualify(found.name)
            loadable = self._env.registry.register_file(identifier, found.path)
            items.append(
                {
                    "name": found.name,
                    "identifier": identifier,
                    "path": _display_path(found, self._env),
                    "loadable": loadable,
                }
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "namespace": self._env.namespace,
                "namespace_dir": str(self._env.namespace_dir),
                "global_fixtures": list(self._env.settings.fixtures.global_fixtures),
                "items": items,
                "count": len(items),
            },
        )

    def plan(self, action: FixtureAction, tokens: list[str]) -> tuple[FixturePlan, list[str]]:
        """Work out what *action* on *tokens* would do, without doing it.

        Returns the plan and the names that have a definition. An empty
        ``plan.fixtures`` means everything found was excluded.

        Raises:
            FixtureNotFoundError: If no requested name has a definition.
            ResolutionEmptyError: If nothing resolves to a registered fixture.
        """
        settings = self._env.settings.fixtures
        filtered = filter_names(tokens)
        discovery = self._env.discovery()

        local = [name for name in filtered.apply if not is_namespaced(name)]
        qualified = [name for name in filtered.apply if is_namespaced(name)]
        resolver = self._resolver()

        not_found: list[str] = []
        if not filtered.apply or is_wildcard(local):
            discovered = discovery.discover_all()
        elif local:
            discovered = discovery.discover(local)
            not_found = discovery.missing(local)
        else:
            discovered = []

        # Namespaced names bypass discovery: they name their module directly.
        located = [name for name in qualified if self._is_defined(resolver.qualify(name))]
        not_found.extend(name for name in qualified if name not in located)

        found = [d.name for d in discovered] + located
        plan = FixturePlan(
            action=action,
            namespace=self._env.namespace,
            namespace_dir=str(self._env.namespace_dir),
            global_fixtures=list(settings.global_fixtures),
            fixtures=subtract(found, filtered.except_),
            excluded=list(filtered.except_),
            not_found=not_found,
        )

        if not found:
            raise FixtureNotFoundError(list(tokens), plan.namespace_dir)
        if not_found:
            self._reporter.notify_not_found(plan)
        if not plan.fixtures:
            return plan, found

        self._register_definitions(resolver, discovery, discovered, plan)
        try:
            resolution = resolver.resolve(plan.fixtures, plan.global_fixtures)
        except ResolutionEmptyError as exc:
            raise ResolutionEmptyError(
                plan.namespace,
                exc.unresolved,
                requested=list(tokens),
                namespace_dir=plan.namespace_dir,
            ) from exc
        plan = dataclasses.replace(
            plan,
            identifiers=resolution.identifiers,
            unresolved=resolution.unresolved,
        )
        if plan.unresolved:
            self._reporter.notify_unresolved(plan)
        return plan, found

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run(self, action: FixtureAction, tokens: list[str]) -> ServiceResult:
        op = str(action)
        if not tokens:
            return ServiceResult(ok=True, op=op, data={"status": str(Notice.EMPTY_INPUT)})

        orchestrator = LifecycleOrchestrator(
            self._env.registry,
            self._env.fixture_context,
            action=action,
        )
        try:
            plan, found = self.plan(action, tokens)
        except FixtureError as exc:
            log.info("fixture.plan_failed", action=op, code=exc.code)
            return ServiceResult.failure(op, exc)

        warnings = _plan_warnings(plan)

        if not plan.fixtures:
            self._reporter.notify_nothing_to_process(plan, found)
            return ServiceResult(
                ok=True,
                op=op,
                data={
                    "status": str(Notice.NOTHING_TO_PROCESS),
                    "namespace": plan.namespace,
                    "found": found,
                    "excluded": plan.excluded,
                },
                warnings=warnings,
            )

        orchestrator.mark_resolved(plan.identifiers)
        if not self._gate.confirm(plan):
            return ServiceResult(
                ok=True,
                op=op,
                data={"status": str(Notice.DECLINED), "plan": plan.to_dict()},
                warnings=warnings,
            )
        orchestrator.mark_confirmed()

        try:
            report = orchestrator.run()
        except FixtureError as exc:
            return ServiceResult.failure(op, exc, warnings=warnings)

        self._dispatch_event(
            f"post_{action}",
            {"namespace": plan.namespace, "identifiers": list(plan.identifiers)},
            warnings,
        )
        log.info(f"fixture.{_DONE_STATUS[action]}", count=len(plan.identifiers))
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "status": _DONE_STATUS[action],
                "namespace": plan.namespace,
                "namespace_dir": plan.namespace_dir,
                "fixtures": list(plan.identifiers),
                "excluded": plan.excluded,
                "steps": report.to_dict()["steps"],
            },
            warnings=warnings,
        )

    def _resolver(self) -> ConfigResolver:
        settings = self._env.settings.fixtures
        return ConfigResolver(
            self._env.registry,
            namespace=self._env.namespace,
            suffix=settings.suffix,
        )

    def _register_definitions(
        self,
        resolver: ConfigResolver,
        discovery: FixtureDiscovery,
        discovered: list[DiscoveredFixture],
        plan: FixturePlan,
    ) -> None:
        """Load the definition modules the plan needs into the registry.

        Bare global names live in the namespace too, so their files are
        looked up as well. A namespaced name ``a.b.name`` is loaded from
        ``<project root>/a/b/name<suffix>.py`` unless something (a plugin,
        usually) has registered it already.
        """
        registry = self._env.registry
        wanted = set(plan.fixtures)
        candidates = [d for d in discovered if d.name in wanted]
        local_globals = [g for g in plan.global_fixtures if not is_namespaced(g)]
        if local_globals:
            candidates.extend(discovery.discover(local_globals))
        for found in candidates:
            registry.register_file(resolver.qualify(found.name), found.path)

        for name in [*plan.global_fixtures, *plan.fixtures]:
            if not is_namespaced(name):
                continue
            identifier = resolver.qualify(name)
            if identifier in registry:
                continue
            path = self._definition_path(identifier)
            if path is not None:
                registry.register_file(identifier, path)

    def _is_defined(self, identifier: str) -> bool:
        return identifier in self._env.registry or self._definition_path(identifier) is not None

    def _definition_path(self, identifier: str) -> Path | None:
        """Map a namespaced identifier onto its definition file, if it exists."""
        module, _, stem = identifier.rpartition(".")
        root = self._env.settings.project_root
        path = namespace_path(root, module) / f"{stem}{DEFINITION_EXTENSION}"
        return path if path.is_file() else None


def _plan_warnings(plan: FixturePlan) -> list[str]:
    warnings = [f"Fixture not found: {name}" for name in plan.not_found]
    warnings.extend(f"Fixture does not resolve: {ident}" for ident in plan.unresolved)
    return warnings


def _display_path(found: DiscoveredFixture, env: FixtureEnvironment) -> str:
    try:
        return str(found.path.relative_to(env.settings.project_root))
    except ValueError:
        return str(found.path)
