"""LESS matcher: the patient is closer to the front than ``value``."""

from __future__ import annotations

from condition_engine.matchers.base import ConditionMatcher
from condition_engine.models.enums import ConditionOperator


class LessMatcher(ConditionMatcher):
    """Matches when ``offset < value`` (strict)."""

    operator = ConditionOperator.LESS
    required_fields = ("value",)

    def compare(self, offset: int, *values: float) -> bool:
        (threshold,) = values
        return offset < threshold
