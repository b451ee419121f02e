"""Tests for the raising guard adapter."""

from __future__ import annotations

import pytest

from shapecheck.domain.schema import Schema
from shapecheck.services.guard import BAD_REQUEST, ValidationException, as_schema, guard


class TestAsSchema:
    def test_schema_passes_through(self) -> None:
        schema = Schema.is_string
        assert as_schema(schema) is schema

    def test_mapping_becomes_object(self) -> None:
        assert as_schema({"a": Schema.is_string}) == Schema.is_object({"a": Schema.is_string})

    def test_list_becomes_array(self) -> None:
        assert as_schema([Schema.is_string]) == Schema.is_array([Schema.is_string])

    def test_rejects_other_values(self) -> None:
        with pytest.raises(TypeError, match="not a mapping, list or Schema"):
            as_schema(42)  # type: ignore[arg-type]


class TestGuard:
    def test_returns_conforming_value(self) -> None:
        check = guard("json", {"name": Schema.is_string})
        body = {"name": "ada"}
        assert check(body) is body

    def test_raises_with_located_messages(self) -> None:
        check = guard("json", {"name": Schema.is_string, "age": Schema.is_integer})
        with pytest.raises(ValidationException) as excinfo:
            check({"name": 1, "age": "x"})
        exc = excinfo.value
        assert exc.status == BAD_REQUEST
        assert exc.key == "json"
        assert len(exc.violations) == 2
        assert str(exc).splitlines() == [
            "`json.name` is not a string.",
            "`json.age` is not a number.",
        ]

    def test_root_violation_uses_key(self) -> None:
        check = guard("query", Schema.is_object())
        with pytest.raises(ValidationException, match=r"^`query` is not an object\.$"):
            check([])

    def test_array_index_location(self) -> None:
        check = guard("json", [Schema.is_string])
        with pytest.raises(ValidationException, match=r"`json\[0\]` is not a string\."):
            check([1])
