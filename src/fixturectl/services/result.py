"""ServiceResult and ServiceError — the contract between services and the CLI.

INVARIANT: Public service methods return ServiceResult; expected
failures never escape as exceptions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from fixturectl.domain.errors import FixtureError


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for service operations.

    Attributes:
        ok: Whether the operation succeeded. Notices (nothing to do,
            declined confirmation) are successes.
        op: Name of the operation (``"load"``, ``"unload"``, ``"upload"``, ...).
        data: Operation-specific payload; fixture commands always set
            ``data["status"]``.
        warnings: Non-fatal issues (names not found, unresolved identifiers).
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (namespace path, counts).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        exc: FixtureError,
        *,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        """Wrap a fatal :class:`FixtureError` raised by the core."""
        return cls(
            ok=False,
            op=op,
            warnings=warnings or [],
            error=ServiceError(code=exc.code, message=exc.message, detail=exc.detail),
        )

    @property
    def status(self) -> str | None:
        """``data["status"]`` if set."""
        return self.data.get("status")
