"""shapecheck — declarative runtime schema validation."""

from __future__ import annotations

from shapecheck.domain.integrity import check_rule_set
from shapecheck.domain.matcher import MatchResult, Violation, format_path, match
from shapecheck.domain.patterns import PATTERNS
from shapecheck.domain.rules import Members, RuleSet
from shapecheck.domain.schema import Schema
from shapecheck.domain.types import MISSING, Kind

__version__ = "0.1.0"

__all__ = [
    "MISSING",
    "PATTERNS",
    "Kind",
    "MatchResult",
    "Members",
    "RuleSet",
    "Schema",
    "Violation",
    "check_rule_set",
    "format_path",
    "match",
]
