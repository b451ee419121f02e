"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from shapecheck.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="validate", data={"valid": True})
        assert result.ok is True
        assert result.op == "validate"
        assert result.data == {"valid": True}
        assert result.warnings == []
        assert result.error is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="SCHEMA_NOT_FOUND", message="Not found")
        result = ServiceResult(ok=False, op="check", error=error)
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "SCHEMA_NOT_FOUND"

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="patterns", data={"patterns": {"slug": "x"}})
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["data"]["patterns"]["slug"] == "x"
        assert parsed["error"] is None

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="validate")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestServiceError:
    def test_detail_defaults_empty(self) -> None:
        assert ServiceError(code="X", message="y").detail == {}

    def test_with_detail(self) -> None:
        error = ServiceError(code="INVALID_DOCUMENT", message="bad", detail={"document": "a.json"})
        assert error.detail["document"] == "a.json"
