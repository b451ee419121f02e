"""Rule sets — the constraint record for one value position.

A :class:`RuleSet` is a frozen dataclass. Builder calls never mutate one;
they produce a copy with more fields layered on (see :meth:`RuleSet.evolve`).

Two kinds of fields exist:

- Always-set fields (``required``, ``nullable``, ``coercers``,
  ``equals_any_of``, ``union_of``, ``kind``) carry a concrete default.
- Optional fields (``length``, ``pattern``, ``integer_only``, ``range``,
  ``size``, ``members``) are ``None`` until set, and are only read by the
  matcher for the kinds they apply to.

INVARIANT: :meth:`RuleSet.merge` is a per-field overwrite. A field of the
right-hand rule set wins whenever it is set; always-set fields therefore
always win.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any

from shapecheck.domain.types import Kind

Bound = int | tuple[int | None, int | None]
"""An exact count, or an inclusive ``(min, max)`` range where None is unbounded."""

Coercer = Callable[[Any], Any]


@dataclass(frozen=True)
class Members:
    """Structural rules for the items of an object or array.

    Attributes:
        named: Rule sets for explicitly named property keys (objects) or
            indices (arrays), in declaration order.
        key_rule: Applied to every object key not listed in *named*.
        value_rule: Applied to every value or item not listed in *named*.
    """

    named: Mapping[str | int, RuleSet] = field(default_factory=dict)
    key_rule: RuleSet | None = None
    value_rule: RuleSet | None = None

    @property
    def is_open(self) -> bool:
        """Whether items beyond the named ones are accepted (and checked)."""
        return self.key_rule is not None or self.value_rule is not None


@dataclass(frozen=True)
class RuleSet:
    """All constraints applying to one value position."""

    required: bool = True
    nullable: bool = False
    coercers: tuple[Coercer, ...] = ()
    equals_any_of: tuple[Any, ...] = ()
    union_of: tuple[RuleSet, ...] = ()
    kind: Kind | str = Kind.STRING
    length: Bound | None = None
    pattern: re.Pattern[str] | None = None
    integer_only: bool | None = None
    range: tuple[Any, Any] | None = None
    size: Bound | None = None
    members: Members | None = None

    def evolve(self, **changes: Any) -> RuleSet:
        """Return a copy with *changes* layered on top."""
        return replace(self, **changes)

    def merge(self, other: RuleSet) -> RuleSet:
        """Return a copy overwritten by every field *other* has set."""
        changes = {}
        for f in fields(other):
            current = getattr(other, f.name)
            if current is not None:
                changes[f.name] = current
        return replace(self, **changes)

    def as_value(self) -> dict[str, Any]:
        """Plain-dict form of this rule set, as consumed by the self-check.

        Empty literal and union lists and unset optional fields are left out.
        ``members`` keeps only the named entries; the key and value rules are
        not part of the enumerable form.
        """
        value: dict[str, Any] = {
            "required": self.required,
            "nullable": self.nullable,
            "coercers": _listed(self.coercers),
            "kind": self.kind,
        }
        if self.equals_any_of:
            value["equals_any_of"] = _listed(self.equals_any_of)
        if isinstance(self.union_of, (list, tuple)):
            if self.union_of:
                value["union_of"] = [_value_form(alternative) for alternative in self.union_of]
        elif self.union_of is not None:
            value["union_of"] = self.union_of
        for name in ("length", "pattern", "integer_only", "range", "size"):
            current = getattr(self, name)
            if current is not None:
                value[name] = current
        if isinstance(self.members, Members):
            value["members"] = {
                key: _value_form(rules) for key, rules in self.members.named.items()
            }
        elif self.members is not None:
            value["members"] = self.members
        return value


def _listed(items: Any) -> Any:
    return list(items) if isinstance(items, (list, tuple)) else items


def _value_form(rules: Any) -> Any:
    # Anything that is not a RuleSet is passed through for the self-check to reject.
    return rules.as_value() if isinstance(rules, RuleSet) else rules
