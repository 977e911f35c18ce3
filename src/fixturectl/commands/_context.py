"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy environment initialization, the
console collaborators for confirmation, and centralized result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from fixturectl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from fixturectl.config.settings import FixtureSettings
    from fixturectl.infrastructure.environment import FixtureEnvironment
    from fixturectl.services.confirmation import ConfirmationGate
    from fixturectl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``. The environment is
    lazily initialized on first use so ``--help`` and ``--version`` never
    touch the database or load plugins.
    """

    def __init__(self, settings: FixtureSettings) -> None:
        self.settings = settings
        self._env: FixtureEnvironment | None = None

        # Configure structured logging
        from fixturectl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def env(self) -> FixtureEnvironment:
        """The fixture environment (created lazily on first access)."""
        if self._env is None:
            from fixturectl.infrastructure.environment import FixtureEnvironment

            self._env = FixtureEnvironment(self.settings)
        return self._env

    def override_fixtures(
        self,
        *,
        namespace: str | None = None,
        global_fixtures: list[str] | None = None,
    ) -> None:
        """Apply per-command ``--namespace`` / ``--global-fixtures`` options."""
        updated = self.settings.with_fixture_overrides(
            namespace=namespace,
            global_fixtures=global_fixtures,
        )
        if updated is self.settings:
            return
        self.settings = updated
        self.close()

    def confirmation_gate(self) -> ConfirmationGate:
        """Gate wired to the terminal, or auto-confirming with ``--no-interact``."""
        from fixturectl.output.reporter import ClickPrompter, ConsoleReporter
        from fixturectl.services.confirmation import AutoConfirm, ConfirmationGate, Prompter

        reporter = ConsoleReporter(
            quiet=self.settings.quiet,
            to_stderr=self.settings.json_output,
        )
        prompter: Prompter = AutoConfirm() if self.settings.no_interact else ClickPrompter()
        return ConfirmationGate(prompter, reporter)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def close(self) -> None:
        """Release the environment (engine connections)."""
        if self._env is not None:
            self._env.close()
            self._env = None
