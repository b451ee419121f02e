"""Value kinds and the absent-value sentinel.

``Kind`` enumerates the seven primitive shapes a rule set can describe.
``MISSING`` stands for a value that is not there at all (an unset property
or an index past the end of a list), which is distinct from ``None``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class Kind(StrEnum):
    """Primitive shapes understood by the matcher."""

    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    REGEXP = "regexp"
    OBJECT = "object"
    ARRAY = "array"


class _Missing:
    """Singleton type for :data:`MISSING`."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Missing:
        return self

    def __deepcopy__(self, memo: dict[int, object]) -> _Missing:
        return self


MISSING: Final = _Missing()
