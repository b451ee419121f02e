"""Schema builder — fluent, chainable construction of rule sets.

Every step returns a *new* :class:`Schema`; the receiver is never modified,
so two chains grown from a common ancestor never share state::

    base = Schema.is_integer
    age = base.is_between(0, 150)
    count = base.is_at_least(0)   # unaffected by ``age``

Every step is also reachable on the class itself, which starts the chain
from the all-defaults rule set (``Schema.is_optional.is_email``).

Arguments are not checked here. A numeric range on a string schema is
accepted silently; :meth:`Schema.check` is how such mistakes surface.
"""

from __future__ import annotations

import re
import types
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Generic, Self, TypeVar

from shapecheck.domain.matcher import MatchResult, match
from shapecheck.domain.patterns import PATTERNS
from shapecheck.domain.rules import Coercer, Members, RuleSet
from shapecheck.domain.types import Kind


_R = TypeVar("_R")


# ---------------------------------------------------------------------------
# Descriptors: one definition serves both ``Schema.x`` and ``schema.x``
# ---------------------------------------------------------------------------


class _step(Generic[_R]):  # noqa: N801
    """Builder method that binds to a fresh default schema when read off the class."""

    def __init__(self, func: Callable[..., _R]) -> None:
        self._func = func
        self.__doc__ = func.__doc__

    def __get__(self, instance: Schema | None, owner: type[Schema]) -> Callable[..., _R]:
        target = instance if instance is not None else owner()
        return types.MethodType(self._func, target)


class _shortcut(Generic[_R]):  # noqa: N801
    """Property-style builder step, also usable on the class."""

    def __init__(self, func: Callable[[Any], _R]) -> None:
        self._func = func
        self.__doc__ = func.__doc__

    def __get__(self, instance: Schema | None, owner: type[Schema]) -> _R:
        target = instance if instance is not None else owner()
        return self._func(target)


def _rules_of(schema: Schema | RuleSet) -> RuleSet:
    return schema.rules if isinstance(schema, Schema) else schema


def _named(
    entries: Mapping[Any, Schema | RuleSet] | Sequence[Schema | RuleSet],
) -> dict[Any, RuleSet]:
    if isinstance(entries, Mapping):
        return {key: _rules_of(schema) for key, schema in entries.items()}
    return {index: _rules_of(schema) for index, schema in enumerate(entries)}


def _optional_rules(schema: Schema | RuleSet | None) -> RuleSet | None:
    return None if schema is None else _rules_of(schema)


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


class Schema:
    """A handle on one :class:`RuleSet`, exposing chainable refinements."""

    __slots__ = ("_rules",)

    def __init__(self, rules: RuleSet | None = None) -> None:
        self._rules = RuleSet() if rules is None else rules

    @property
    def rules(self) -> RuleSet:
        """The rule set this schema stands for."""
        return self._rules

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._rules!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schema):
            return NotImplemented
        return self._rules == other._rules

    __hash__ = None  # type: ignore[assignment]

    def _with(self, **changes: Any) -> Self:
        return type(self)(self._rules.evolve(**changes))

    @_step
    def with_rules(self, **changes: Any) -> Self:
        """Layer arbitrary rule-set fields; the low-level form of every step."""
        return self._with(**changes)

    # --- Presence ---

    @_shortcut
    def is_required(self) -> Self:
        return self._with(required=True)

    @_shortcut
    def is_optional(self) -> Self:
        return self._with(required=False)

    @_shortcut
    def is_not_null(self) -> Self:
        return self._with(nullable=False)

    @_shortcut
    def may_be_null(self) -> Self:
        return self._with(nullable=True)

    # --- Coercion and literals ---

    @_step
    def coerce(self, *coercers: Coercer) -> Self:
        """Transform the value, in order, before any type check (replaces earlier coercers)."""
        return self._with(coercers=tuple(coercers))

    @_step
    def equals(self, value: Any) -> Self:
        return self._with(equals_any_of=(value,))

    @_step
    def is_any_of(self, *values: Any) -> Self:
        return self._with(equals_any_of=tuple(values))

    @_step
    def is_either(self, *schemas: Schema | RuleSet) -> Self:
        """Accept the value if it satisfies at least one of *schemas*.

        The alternatives are stored as given. Each is merged onto this
        schema's own rules only when a value is matched.
        """
        return self._with(union_of=tuple(_rules_of(schema) for schema in schemas))

    # --- Strings ---

    @_shortcut
    def is_string(self) -> Self:
        return self._with(kind=Kind.STRING)

    @_shortcut
    def is_uuid(self) -> Self:
        return self._with(kind=Kind.STRING, pattern=PATTERNS["uuid"])

    @_shortcut
    def is_slug(self) -> Self:
        return self._with(kind=Kind.STRING, pattern=PATTERNS["slug"], length=(0, 20))

    @_shortcut
    def is_email(self) -> Self:
        return self._with(kind=Kind.STRING, pattern=PATTERNS["email"], length=(0, 100))

    @_shortcut
    def has_length(self) -> Self:
        """Non-empty string."""
        return self._with(length=(1, None))

    @_step
    def length_is_at_least(self, minimum: int) -> Self:
        return self._with(length=(minimum, None))

    @_step
    def length_is_at_most(self, maximum: int) -> Self:
        return self._with(length=(None, maximum))

    @_step
    def length_is_between(self, minimum: int, maximum: int) -> Self:
        return self._with(length=(minimum, maximum))

    @_step
    def length_is(self, length: int) -> Self:
        return self._with(length=length)

    @_step
    def matches(self, pattern: re.Pattern[str] | str) -> Self:
        """Require a full match of *pattern* (strings are compiled)."""
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        return self._with(pattern=pattern)

    # --- Numbers and dates ---

    @_shortcut
    def is_number(self) -> Self:
        return self._with(kind=Kind.NUMBER, integer_only=False)

    @_shortcut
    def is_integer(self) -> Self:
        return self._with(kind=Kind.NUMBER, integer_only=True)

    @_shortcut
    def is_float(self) -> Self:
        return self.is_number

    @_shortcut
    def is_date(self) -> Self:
        return self._with(kind=Kind.DATE)

    @_step
    def is_at_least(self, minimum: Any) -> Self:
        return self._with(range=(minimum, None))

    @_step
    def is_at_most(self, maximum: Any) -> Self:
        return self._with(range=(None, maximum))

    @_step
    def is_between(self, minimum: Any, maximum: Any) -> Self:
        return self._with(range=(minimum, maximum))

    @_step
    def is_not_before(self, minimum: Any) -> Self:
        return self.is_at_least(minimum)

    @_step
    def is_not_after(self, maximum: Any) -> Self:
        return self.is_at_most(maximum)

    # --- Booleans and patterns ---

    @_shortcut
    def is_boolean(self) -> Self:
        return self._with(kind=Kind.BOOLEAN)

    @_shortcut
    def is_regexp(self) -> Self:
        return self._with(kind=Kind.REGEXP)

    # --- Structures ---

    @_step
    def is_object(self, *args: Any) -> Self:
        """Require a dict, optionally describing its properties.

        Calling conventions:

        - ``is_object()``: any dict.
        - ``is_object(schema)``: every property value obeys *schema*.
        - ``is_object({"name": schema, ...})``: exactly these properties.
        - ``is_object(key_rule, value_rule, members)``: full control; any
          element may be None.
        """
        if not args:
            return self._with(kind=Kind.OBJECT, members=None)
        if len(args) == 1 and isinstance(args[0], Schema):
            return self._with(kind=Kind.OBJECT, members=Members(value_rule=args[0].rules))
        if len(args) == 1 and isinstance(args[0], Mapping):
            return self._with(kind=Kind.OBJECT, members=Members(named=_named(args[0])))
        key_rule, value_rule, named = (*args, None, None)[:3]
        members = Members(
            named=_named(named or {}),
            key_rule=_optional_rules(key_rule),
            value_rule=_optional_rules(value_rule),
        )
        return self._with(kind=Kind.OBJECT, members=members)

    @_step
    def is_array(self, *args: Any) -> Self:
        """Require a list or tuple, optionally describing its items.

        Calling conventions:

        - ``is_array()``: any list.
        - ``is_array(schema)``: every item obeys *schema*.
        - ``is_array({0: schema, 1: schema})`` or ``is_array([schema, schema])``:
          exactly these positions.
        - ``is_array(value_rule, members)``: named positions, with
          *value_rule* for every other item.
        """
        if not args:
            return self._with(kind=Kind.ARRAY, members=None)
        if len(args) == 1 and isinstance(args[0], Schema):
            return self._with(kind=Kind.ARRAY, members=Members(value_rule=args[0].rules))
        if len(args) == 1 and isinstance(args[0], (Mapping, list, tuple)):
            return self._with(kind=Kind.ARRAY, members=Members(named=_named(args[0])))
        value_rule, named = (*args, None)[:2]
        members = Members(named=_named(named or {}), value_rule=_optional_rules(value_rule))
        return self._with(kind=Kind.ARRAY, members=members)

    @_step
    def has_exactly(self, size: int) -> Self:
        return self._with(size=size)

    @_step
    def has_at_least(self, minimum: int) -> Self:
        return self._with(size=(minimum, None))

    @_step
    def has_at_most(self, maximum: int) -> Self:
        return self._with(size=(None, maximum))

    @_step
    def has_between(self, minimum: int, maximum: int) -> Self:
        return self._with(size=(minimum, maximum))

    # --- Evaluation ---

    def validate(self, value: Any) -> MatchResult:
        """Match *value* against this schema."""
        return match(value, self._rules)

    def check(self, *, deep: bool = False) -> MatchResult:
        """Check that this schema's rule set is itself well-formed."""
        from shapecheck.domain.integrity import check_rule_set

        return check_rule_set(self._rules, deep=deep)
