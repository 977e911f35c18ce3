"""Error and notice taxonomy for fixture commands.

Fatal conditions are exceptions raised by the core and turned into a
failed ``ServiceResult`` at the service boundary. Notices are not
exceptions: they end a command normally and are reported through
``data["status"]``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class Notice(StrEnum):
    """Non-fatal outcomes that end a command without touching the backend."""

    EMPTY_INPUT = "empty_input"
    NOTHING_TO_PROCESS = "nothing_to_process"
    DECLINED = "declined"


class FixtureError(Exception):
    """Base class for fatal fixture command errors."""

    code = "FIXTURE_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class FixtureNotFoundError(FixtureError):
    """None of the requested names matched a definition under the namespace."""

    code = "FIXTURE_NOT_FOUND"

    def __init__(self, requested: list[str], namespace_dir: str) -> None:
        message = (
            f'No files were found by name: "{", ".join(requested)}". '
            f'Check that files with these names exist under fixtures path: "{namespace_dir}".'
        )
        super().__init__(message, requested=requested, namespace_dir=namespace_dir)
        self.requested = requested
        self.namespace_dir = namespace_dir


class ResolutionEmptyError(FixtureError):
    """Nothing left after qualifying names and dropping unresolved ones."""

    code = "RESOLUTION_EMPTY"

    def __init__(
        self,
        namespace: str,
        unresolved: list[str],
        *,
        requested: list[str] | None = None,
        namespace_dir: str | None = None,
    ) -> None:
        message = f'No fixtures were found in namespace: "{namespace}".'
        if requested:
            message += f' Nothing loadable for: "{", ".join(requested)}".'
        if namespace_dir:
            message += f' Check the definitions under fixtures path: "{namespace_dir}".'
        super().__init__(
            message,
            namespace=namespace,
            unresolved=unresolved,
            requested=requested or [],
            namespace_dir=namespace_dir,
        )
        self.namespace = namespace
        self.unresolved = unresolved
        self.requested = requested or []
        self.namespace_dir = namespace_dir


class FixtureOperationError(FixtureError):
    """A fixture failed while being built, unloaded, or loaded.

    Steps already performed are left in place; ``completed`` lists them.
    """

    code = "FIXTURE_OPERATION_FAILED"

    def __init__(
        self,
        identifier: str,
        action: str,
        cause: BaseException,
        completed: list[tuple[str, str]],
    ) -> None:
        message = f"Fixture {identifier} failed to {action}: {cause}"
        super().__init__(
            message,
            identifier=identifier,
            action=action,
            completed=[{"identifier": i, "action": a} for i, a in completed],
        )
        self.identifier = identifier
        self.action = action
        self.cause = cause
        self.completed = completed
