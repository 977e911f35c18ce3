"""Tests for ServiceResult and ServiceError."""

import pytest
from pydantic import ValidationError

from fixturectl.domain.errors import FixtureNotFoundError
from fixturectl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success(self) -> None:
        result = ServiceResult(ok=True, op="load", data={"status": "loaded"})
        assert result.status == "loaded"
        assert result.error is None
        assert result.warnings == []

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="load")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]

    def test_failure_from_error(self) -> None:
        exc = FixtureNotFoundError(["Ghost"], "/p/ns")
        result = ServiceResult.failure("load", exc, warnings=["w"])
        assert not result.ok
        assert result.error == ServiceError(code=exc.code, message=exc.message, detail=exc.detail)
        assert result.warnings == ["w"]
        assert result.status is None

    def test_serializes(self) -> None:
        result = ServiceResult(ok=True, op="list", data={"count": 0})
        assert result.model_dump()["data"] == {"count": 0}
