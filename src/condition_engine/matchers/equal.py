"""EQUAL matcher: the patient sits exactly ``value`` places from CQP."""

from __future__ import annotations

from condition_engine.matchers.base import ConditionMatcher
from condition_engine.models.enums import ConditionOperator


class EqualMatcher(ConditionMatcher):
    """Matches when ``offset == value``."""

    operator = ConditionOperator.EQUAL
    required_fields = ("value",)

    def compare(self, offset: int, *values: float) -> bool:
        (target,) = values
        return offset == target
