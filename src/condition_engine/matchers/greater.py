"""GREATER matcher: the patient is further back than ``value``."""

from __future__ import annotations

from condition_engine.matchers.base import ConditionMatcher
from condition_engine.models.enums import ConditionOperator


class GreaterMatcher(ConditionMatcher):
    """Matches when ``offset > value`` (strict)."""

    operator = ConditionOperator.GREATER
    required_fields = ("value",)

    def compare(self, offset: int, *values: float) -> bool:
        (threshold,) = values
        return offset > threshold
