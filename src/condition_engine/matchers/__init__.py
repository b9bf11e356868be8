"""Per-operator matching predicates for numeric message conditions."""

from condition_engine.matchers.base import ConditionMatcher, parse_number

__all__ = ["ConditionMatcher", "parse_number"]
