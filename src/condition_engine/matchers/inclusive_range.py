"""RANGE matcher: the patient falls inside ``[min_value, max_value]``.

Both ends are inclusive. An inverted range (min > max) simply never
matches; the editor-side validation flags it as incomplete.
"""

from __future__ import annotations

from condition_engine.matchers.base import ConditionMatcher
from condition_engine.models.enums import ConditionOperator


class RangeMatcher(ConditionMatcher):
    """Matches when ``min_value <= offset <= max_value``."""

    operator = ConditionOperator.RANGE
    required_fields = ("min_value", "max_value")

    def compare(self, offset: int, *values: float) -> bool:
        lower, upper = values
        return lower <= offset <= upper
