"""Self-check — the matcher validating its own rule sets.

``META_SCHEMA`` describes the plain-dict form of a :class:`RuleSet`
(see :meth:`RuleSet.as_value`) and is written with the same builder as any
other schema. ``check_rule_set()`` matches a rule set's value form against
it, so a malformed combination built through :meth:`Schema.with_rules` (an
unknown kind, a string length, a one-item union) is reported as ordinary
violations instead of failing later inside the matcher.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from shapecheck.domain.matcher import MatchResult, Path, Violation, match
from shapecheck.domain.rules import Members, RuleSet
from shapecheck.domain.schema import Schema
from shapecheck.domain.types import Kind

KEY_RULE_SEGMENT = "<keys>"
VALUE_RULE_SEGMENT = "<values>"

_COUNT_PAIR = Schema.is_array(
    {0: Schema.may_be_null.is_integer, 1: Schema.may_be_null.is_integer}
).has_exactly(2)
_BOUND = Schema.is_optional.is_either(Schema.is_integer, _COUNT_PAIR)
_RANGE_END = Schema.may_be_null.is_either(Schema.is_number, Schema.is_date)

META_SCHEMA: Schema = Schema.is_object(
    {
        "required": Schema.is_optional.is_boolean,
        "nullable": Schema.is_optional.is_boolean,
        "coercers": Schema.is_optional.is_array(),
        "equals_any_of": Schema.is_optional.is_array().has_at_least(1),
        "union_of": Schema.is_optional.is_array().has_at_least(2),
        "kind": Schema.is_any_of(*Kind),
        "length": _BOUND,
        "pattern": Schema.is_optional.is_regexp,
        "integer_only": Schema.is_optional.is_boolean,
        "range": Schema.is_optional.is_array({0: _RANGE_END, 1: _RANGE_END}).has_exactly(2),
        "size": _BOUND,
        "members": Schema.is_optional.is_object(Schema.is_object()),
    }
)


def check_rule_set(rules: RuleSet, *, deep: bool = False) -> MatchResult:
    """Match *rules* against :data:`META_SCHEMA`.

    Args:
        rules: The rule set to inspect.
        deep: Also check every nested rule set (union alternatives, named
            members, key and value rules). Nested violations are prefixed
            with the position of the nested rule set, e.g.
            ``("members", "tags", "kind")``.
    """
    result = match(rules.as_value(), META_SCHEMA.rules)
    if not deep:
        return result

    valid = result.valid
    violations = list(result.violations)
    for prefix, nested in _nested_rule_sets(rules):
        if not isinstance(nested, RuleSet):
            valid = False
            violations.append(Violation(prefix, "is not a rule set."))
            continue
        nested_result = check_rule_set(nested, deep=True)
        valid = valid and nested_result.valid
        violations.extend(
            Violation((*prefix, *violation.path), violation.message)
            for violation in nested_result.violations
        )
    return MatchResult(valid, tuple(violations))


def _nested_rule_sets(rules: RuleSet) -> Iterator[tuple[Path, Any]]:
    union_of = rules.union_of if isinstance(rules.union_of, (list, tuple)) else ()
    for index, alternative in enumerate(union_of):
        yield ("union_of", index), alternative
    members = rules.members
    # Anything else is already reported by META_SCHEMA at ("members", ...).
    if not isinstance(members, Members):
        return
    for key, nested in members.named.items():
        yield ("members", key), nested
    if members.key_rule is not None:
        yield ("members", KEY_RULE_SEGMENT), members.key_rule
    if members.value_rule is not None:
        yield ("members", VALUE_RULE_SEGMENT), members.value_rule
