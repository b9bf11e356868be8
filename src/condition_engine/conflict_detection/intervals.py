"""Offset intervals covered by numeric conditions.

Offsets are integers, so each operator maps to a closed integer interval:
    EQUAL v      -> [v, v]
    GREATER v    -> [v + 1, +inf)
    LESS v       -> (-inf, v - 1]
    RANGE lo, hi -> [lo, hi]
Fractional bounds are tightened to the integers they admit. Conditions with
missing or non-numeric fields, an empty interval, or a fallback operator
(DEFAULT, UNCONDITIONED) have no interval.
"""

from __future__ import annotations

import math

from condition_engine.matchers.base import parse_number
from condition_engine.models.condition import MessageCondition
from condition_engine.models.conflict import OffsetInterval
from condition_engine.models.enums import ConditionOperator


def condition_to_interval(condition: MessageCondition) -> OffsetInterval | None:
    """Convert a condition to the offsets it can match, or None."""
    op = condition.operator

    if op is ConditionOperator.RANGE:
        lower = parse_number(condition.min_value)
        upper = parse_number(condition.max_value)
        if lower is None or upper is None:
            return None
        interval = OffsetInterval(lower=math.ceil(lower), upper=math.floor(upper))
        return interval if interval.lower <= interval.upper else None

    if op not in (ConditionOperator.EQUAL, ConditionOperator.GREATER, ConditionOperator.LESS):
        return None

    value = parse_number(condition.value)
    if value is None:
        return None

    if op is ConditionOperator.EQUAL:
        if not value.is_integer():
            return None
        return OffsetInterval(lower=int(value), upper=int(value))
    if op is ConditionOperator.GREATER:
        return OffsetInterval(lower=math.floor(value) + 1, upper=None)
    return OffsetInterval(lower=None, upper=math.ceil(value) - 1)


def conditions_overlap(first: MessageCondition, second: MessageCondition) -> bool:
    """True if both conditions have intervals and those intervals intersect."""
    a = condition_to_interval(first)
    b = condition_to_interval(second)
    if a is None or b is None:
        return False
    return a.overlaps(b)
