"""The matcher — recursive evaluation of a value against a rule set.

``match()`` is a pure function of ``(value, rules, path)``. Checks run in a
fixed order and short-circuit at the first terminal case:

1. presence (``MISSING``)
2. nullability (``None``)
3. coercion (exceptions propagate)
4. literal membership
5. union of alternatives
6. dispatch on ``rules.kind``

INVARIANT: ``result.valid`` is True exactly when ``result.violations`` is empty.
Violations are reported in evaluation order; within a structural node named
members come first, then unnamed keys, then unnamed values.
"""

from __future__ import annotations

import numbers
import re
from collections.abc import Callable, Iterable
from datetime import UTC, date, datetime
from typing import Any, NamedTuple

from shapecheck.domain.patterns import pattern_name
from shapecheck.domain.rules import Bound, RuleSet
from shapecheck.domain.types import MISSING, Kind

PathSegment = str | int
Path = tuple[PathSegment, ...]


class Violation(NamedTuple):
    """One failed constraint at one position."""

    path: Path
    message: str

    @property
    def location(self) -> str:
        """The path rendered for display, e.g. ``tags[1]``."""
        return format_path(self.path)


class MatchResult(NamedTuple):
    """Verdict plus violations; unpacks as ``valid, violations``."""

    valid: bool
    violations: tuple[Violation, ...] = ()


_VALID = MatchResult(True)


def format_path(path: Iterable[PathSegment], root: str | None = None) -> str:
    """Render *path* with dots between keys and brackets around indices.

    Examples:
        >>> format_path(("tags", 1))
        'tags[1]'
        >>> format_path(("user", "address", "city"), root="body")
        'body.user.address.city'
        >>> format_path(())
        ''
    """
    rendered = root or ""
    for segment in path:
        if isinstance(segment, int) and not isinstance(segment, bool):
            rendered += f"[{segment}]"
        elif rendered:
            rendered += f".{segment}"
        else:
            rendered = str(segment)
    return rendered


def match(value: Any, rules: RuleSet, path: Path = ()) -> MatchResult:
    """Decide *value* against *rules*.

    Raises:
        ValueError: If ``rules.kind`` is not a known kind.
        Exception: Whatever a coercer raises is propagated unchanged.
    """
    if value is MISSING:
        return _fail(path, "is undefined.") if rules.required else _VALID
    if value is None:
        return _VALID if rules.nullable else _fail(path, "is null.")

    for coercer in rules.coercers:
        value = coercer(value)

    if rules.equals_any_of:
        if any(_strictly_equal(value, literal) for literal in rules.equals_any_of):
            return _VALID
        return _fail(path, "does not equal any required value.")

    if rules.union_of:
        return _any_of(
            match(value, rules.merge(alternative).evolve(union_of=()), path)
            for alternative in rules.union_of
        )

    check = _KIND_CHECKS.get(rules.kind)
    if check is None:
        msg = f"Unknown rule set kind: {rules.kind!r}"
        raise ValueError(msg)
    return check(value, rules, path)


# ---------------------------------------------------------------------------
# Result helpers
# ---------------------------------------------------------------------------


def _fail(path: Path, message: str) -> MatchResult:
    return MatchResult(False, (Violation(path, message),))


def _all_of(results: Iterable[MatchResult]) -> MatchResult:
    violations: list[Violation] = []
    valid = True
    for result in results:
        valid = valid and result.valid
        violations.extend(result.violations)
    return MatchResult(valid, tuple(violations))


def _any_of(results: Iterable[MatchResult]) -> MatchResult:
    """Valid if any alternative is; otherwise every alternative's violations.

    A successful union reports nothing, so the violations of the failing
    alternatives are discarded.
    """
    violations: list[Violation] = []
    for result in list(results):
        if result.valid:
            return _VALID
        violations.extend(result.violations)
    return MatchResult(False, tuple(violations))


# ---------------------------------------------------------------------------
# Value predicates
# ---------------------------------------------------------------------------


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_count(bound: Any) -> bool:
    return isinstance(bound, int) and not isinstance(bound, bool)


def _is_pair(bound: Any) -> bool:
    return isinstance(bound, (tuple, list)) and len(bound) == 2


def _strictly_equal(value: Any, literal: Any) -> bool:
    # Booleans are not numbers here: True must not equal 1.
    if isinstance(value, bool) or isinstance(literal, bool):
        return value is literal
    return bool(value == literal)


def _comparable(value: date, bound: date) -> tuple[date, date]:
    """Align a ``datetime`` against a plain ``date`` by calendar day.

    When only one of two datetimes carries a timezone, the naive one is read
    as UTC.
    """
    if isinstance(value, datetime) and isinstance(bound, datetime):
        if value.tzinfo is None and bound.tzinfo is not None:
            return value.replace(tzinfo=UTC), bound
        if bound.tzinfo is None and value.tzinfo is not None:
            return value, bound.replace(tzinfo=UTC)
        return value, bound
    if isinstance(value, datetime) and not isinstance(bound, datetime):
        return value.date(), bound
    if isinstance(bound, datetime) and not isinstance(value, datetime):
        return value, bound.date()
    return value, bound


def _size_violation(count: int, size: Bound | None, singular: str, plural: str) -> str | None:
    if _is_count(size) and count != size:
        return f"does not have exactly {size} {singular if size == 1 else plural}."
    if _is_pair(size):
        low, high = size
        if low is not None and count < low:
            return f"has fewer than {low} {plural}."
        if high is not None and count > high:
            return f"has more than {high} {plural}."
    return None


# ---------------------------------------------------------------------------
# Kind checks
# ---------------------------------------------------------------------------


def _check_string(value: Any, rules: RuleSet, path: Path) -> MatchResult:
    if not isinstance(value, str):
        return _fail(path, "is not a string.")

    length = rules.length
    if _is_count(length) and len(value) != length:
        return _fail(path, f"length is not {length}.")
    if _is_pair(length):
        low, high = length
        if low is not None and len(value) < low:
            return _fail(path, f"is shorter than {low} characters.")
        if high is not None and len(value) > high:
            return _fail(path, f"is longer than {high} characters.")

    pattern = rules.pattern
    if isinstance(pattern, re.Pattern) and pattern.fullmatch(value) is None:
        name = pattern_name(pattern) or pattern.pattern
        return _fail(path, f"does not match the pattern `{name}`.")

    return _VALID


def _check_number(value: Any, rules: RuleSet, path: Path) -> MatchResult:
    if not _is_number(value):
        return _fail(path, "is not a number.")
    if rules.integer_only and value % 1 != 0:
        return _fail(path, "is not an integer.")

    if _is_pair(rules.range):
        low, high = rules.range
        if _is_number(low) and value < low:
            return _fail(path, f"is less than {low}.")
        if _is_number(high) and value > high:
            return _fail(path, f"is greater than {high}.")

    return _VALID


def _check_date(value: Any, rules: RuleSet, path: Path) -> MatchResult:
    if not isinstance(value, date):
        return _fail(path, "is not a date.")

    if _is_pair(rules.range):
        low, high = rules.range
        if isinstance(low, date):
            current, bound = _comparable(value, low)
            if current < bound:
                return _fail(path, f"is before {low.isoformat()}.")
        if isinstance(high, date):
            current, bound = _comparable(value, high)
            if current > bound:
                return _fail(path, f"is after {high.isoformat()}.")

    return _VALID


def _check_boolean(value: Any, rules: RuleSet, path: Path) -> MatchResult:
    if not isinstance(value, bool):
        return _fail(path, "is not a boolean.")
    return _VALID


def _check_regexp(value: Any, rules: RuleSet, path: Path) -> MatchResult:
    if not isinstance(value, re.Pattern):
        return _fail(path, "is not a regular expression.")
    return _VALID


def _check_object(value: Any, rules: RuleSet, path: Path) -> MatchResult:
    if not isinstance(value, dict):
        return _fail(path, "is not an object.")

    message = _size_violation(len(value), rules.size, "property", "properties")
    if message is not None:
        return _fail(path, message)

    members = rules.members
    if members is None:
        return _VALID

    named = members.named
    if not members.is_open and any(key not in named for key in value):
        return _fail(path, "contains unspecified properties.")

    results = [match(value.get(key, MISSING), sub, (*path, key)) for key, sub in named.items()]
    if members.key_rule is not None:
        results.extend(
            match(_as_key(key), members.key_rule, (*path, f"{key}*"))
            for key in value
            if key not in named
        )
    if members.value_rule is not None:
        results.extend(
            match(item, members.value_rule, (*path, key))
            for key, item in value.items()
            if key not in named
        )
    return _all_of(results)


def _as_key(key: Any) -> str:
    # Keys are matched as strings, like JSON object keys.
    return key if isinstance(key, str) else str(key)


def _item_at(value: list[Any] | tuple[Any, ...], index: PathSegment) -> Any:
    if _is_count(index) and 0 <= index < len(value):
        return value[index]
    return MISSING


def _check_array(value: Any, rules: RuleSet, path: Path) -> MatchResult:
    if not isinstance(value, (list, tuple)):
        return _fail(path, "is not an array.")

    message = _size_violation(len(value), rules.size, "item", "items")
    if message is not None:
        return _fail(path, message)

    members = rules.members
    if members is None:
        return _VALID

    named = members.named
    if members.value_rule is None:
        allowed = max((index + 1 for index in named if _is_count(index)), default=0)
        if len(value) > allowed:
            return _fail(path, "contains unspecified items.")

    results = [match(_item_at(value, index), sub, (*path, index)) for index, sub in named.items()]
    if members.value_rule is not None:
        results.extend(
            match(item, members.value_rule, (*path, index))
            for index, item in enumerate(value)
            if index not in named
        )
    return _all_of(results)


_KIND_CHECKS: dict[str, Callable[[Any, RuleSet, Path], MatchResult]] = {
    Kind.STRING: _check_string,
    Kind.NUMBER: _check_number,
    Kind.DATE: _check_date,
    Kind.BOOLEAN: _check_boolean,
    Kind.REGEXP: _check_regexp,
    Kind.OBJECT: _check_object,
    Kind.ARRAY: _check_array,
}
