"""Tests for the rule-set self-check."""

from __future__ import annotations

from datetime import date

import pytest

from shapecheck.domain.integrity import META_SCHEMA, check_rule_set
from shapecheck.domain.rules import Members, RuleSet
from shapecheck.domain.schema import Schema
from shapecheck.domain.types import Kind


def _located(result) -> list[tuple[tuple, str]]:
    return [(v.path, v.message) for v in result.violations]


class TestWellFormed:
    def test_default_rule_set(self) -> None:
        assert check_rule_set(RuleSet()).valid

    @pytest.mark.parametrize(
        "schema",
        [
            Schema.is_string,
            Schema.is_optional.may_be_null.is_string,
            Schema.is_uuid,
            Schema.is_slug,
            Schema.is_email,
            Schema.has_length,
            Schema.length_is(3),
            Schema.length_is_between(1, 5),
            Schema.matches(r"\d+"),
            Schema.is_integer.is_between(0, 10),
            Schema.is_float.is_at_least(0.5),
            Schema.is_date.is_not_before(date(2020, 1, 1)),
            Schema.is_boolean,
            Schema.is_regexp,
            Schema.equals("x"),
            Schema.is_any_of(1, 2),
            Schema.coerce(str.strip).is_string,
            Schema.is_either(Schema.is_string, Schema.is_number),
            Schema.is_object(),
            Schema.is_object({"a": Schema.is_string}).has_at_most(3),
            Schema.is_object(Schema.is_uuid, Schema.is_number, {"a": Schema.is_string}),
            Schema.is_array(Schema.is_string).has_between(1, 3),
            Schema.is_array([Schema.is_string, Schema.is_number]).has_exactly(2),
        ],
    )
    def test_builder_output_is_valid(self, schema: Schema) -> None:
        result = schema.check(deep=True)
        assert result.valid, result.violations

    def test_meta_schema_is_well_formed(self) -> None:
        assert META_SCHEMA.check(deep=True).valid


class TestMalformed:
    def test_unknown_kind(self) -> None:
        result = Schema.with_rules(kind="unknown").check()
        assert not result.valid
        assert _located(result) == [(("kind",), "does not equal any required value.")]

    def test_string_length(self) -> None:
        result = Schema.with_rules(length="abc").check()
        assert not result.valid
        assert _located(result) == [
            (("length",), "is not a number."),
            (("length",), "is not an array."),
        ]

    def test_single_alternative_union(self) -> None:
        result = Schema.is_either(Schema.is_string).check()
        assert _located(result) == [(("union_of",), "has fewer than 2 items.")]

    def test_pattern_not_compiled(self) -> None:
        result = Schema.with_rules(pattern="abc").check()
        assert _located(result) == [(("pattern",), "is not a regular expression.")]

    def test_range_end_not_comparable(self) -> None:
        result = Schema.with_rules(range=("a", None)).check()
        paths = [v.path for v in result.violations]
        assert paths == [("range", 0), ("range", 0)]

    def test_member_that_is_not_a_rule_set(self) -> None:
        rules = RuleSet(kind=Kind.OBJECT, members=Members(named={"a": 42}))
        result = check_rule_set(rules)
        assert _located(result) == [(("members", "a"), "is not an object.")]


class TestShallowAndDeep:
    def test_shallow_ignores_nested(self) -> None:
        schema = Schema.is_object({"a": Schema.with_rules(kind="unknown")})
        assert schema.check().valid

    def test_deep_named_member(self) -> None:
        schema = Schema.is_object({"a": Schema.with_rules(kind="unknown")})
        result = schema.check(deep=True)
        assert not result.valid
        assert _located(result) == [
            (("members", "a", "kind"), "does not equal any required value.")
        ]

    def test_deep_key_rule(self) -> None:
        schema = Schema.is_object(Schema.with_rules(kind="nope"), Schema.is_number, {})
        result = schema.check(deep=True)
        assert [v.path for v in result.violations] == [("members", "<keys>", "kind")]

    def test_deep_value_rule(self) -> None:
        schema = Schema.is_array(Schema.with_rules(pattern="x"))
        result = schema.check(deep=True)
        assert [v.path for v in result.violations] == [("members", "<values>", "pattern")]

    def test_deep_union_alternative(self) -> None:
        schema = Schema.is_either(Schema.is_string, Schema.is_array().with_rules(size="big"))
        result = schema.check(deep=True)
        assert {v.path for v in result.violations} == {("union_of", 1, "size")}
        assert len(result.violations) == 2

    def test_deep_nested_non_rule_set(self) -> None:
        rules = RuleSet(kind=Kind.ARRAY, members=Members(value_rule="string"))
        result = check_rule_set(rules, deep=True)
        assert _located(result) == [(("members", "<values>"), "is not a rule set.")]

    def test_deep_is_recursive(self) -> None:
        inner = Schema.is_object({"b": Schema.with_rules(kind="unknown")})
        schema = Schema.is_object({"a": inner})
        result = schema.check(deep=True)
        assert [v.path for v in result.violations] == [("members", "a", "members", "b", "kind")]

    def test_deep_with_plain_members_mapping(self) -> None:
        schema = Schema.with_rules(kind="object", members={"a": Schema.is_string.rules})
        shallow = schema.check()
        deep = schema.check(deep=True)
        assert _located(deep) == _located(shallow)
        assert _located(deep) == [(("members", "a"), "is not an object.")]

    def test_union_that_is_not_a_sequence(self) -> None:
        result = Schema.with_rules(union_of=5).check(deep=True)
        assert _located(result) == [(("union_of",), "is not an array.")]
