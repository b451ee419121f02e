"""Guard adapter — turn a schema into a raising check for request inputs.

The matcher reports invalid input as a return value. Callers sitting in
front of a request handler usually want an exception instead; ``guard()``
builds that callable. It is transport-agnostic: the exception carries an
HTTP-style ``status`` for whatever framework catches it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from shapecheck.domain.matcher import Violation, format_path
from shapecheck.domain.schema import Schema

logger = logging.getLogger(__name__)

BAD_REQUEST = 400

Ruleset = Schema | Mapping[str, Schema] | list[Schema] | tuple[Schema, ...]


class ValidationException(Exception):
    """Raised by a guard when a value does not conform.

    The message holds one line per violation: ``\\`key.path\\` message``.
    """

    status = BAD_REQUEST

    def __init__(self, key: str, violations: Iterable[Violation]) -> None:
        self.key = key
        self.violations = tuple(violations)
        super().__init__(
            "\n".join(
                f"`{format_path(violation.path, root=key)}` {violation.message}"
                for violation in self.violations
            )
        )


def as_schema(ruleset: Ruleset) -> Schema:
    """Normalize a schema shorthand.

    A mapping becomes ``Schema.is_object(mapping)`` and a list or tuple
    becomes ``Schema.is_array(items)``.

    Raises:
        TypeError: If *ruleset* is none of the accepted forms.
    """
    if isinstance(ruleset, Schema):
        return ruleset
    if isinstance(ruleset, Mapping):
        return Schema.is_object(ruleset)
    if isinstance(ruleset, (list, tuple)):
        return Schema.is_array(ruleset)
    msg = f"Ruleset is not a mapping, list or Schema: {type(ruleset).__name__}"
    raise TypeError(msg)


def guard(key: str, ruleset: Ruleset) -> Callable[[Any], Any]:
    """Build a check for the input named *key* (e.g. ``"json"``, ``"query"``).

    The returned callable passes a conforming value through unchanged and
    raises :class:`ValidationException` otherwise.
    """
    schema = as_schema(ruleset)

    def check(value: Any) -> Any:
        valid, violations = schema.validate(value)
        if not valid:
            logger.debug("Rejected %s input with %d violation(s)", key, len(violations))
            raise ValidationException(key, violations)
        return value

    return check
