"""Editor-time validation helpers for condition sets.

These back the condition editor: blocking errors (duplicate priorities),
non-blocking warnings (overlaps, coverage gaps, everything disabled), and a
few preview helpers. None of them affect resolution.
"""

from __future__ import annotations

from collections.abc import Sequence

from condition_engine.conflict_detection.intervals import condition_to_interval
from condition_engine.math.offset import calculate_offset
from condition_engine.matchers.base import parse_number
from condition_engine.models.condition import MessageCondition, Patient, RawNumber
from condition_engine.models.conflict import ConditionValidation, OffsetInterval
from condition_engine.models.enums import NUMERIC_OPERATORS, ConditionOperator
from condition_engine.registry import MatcherRegistry

_OPERATOR_LABELS: dict[ConditionOperator, str] = {
    ConditionOperator.EQUAL: "يساوي",
    ConditionOperator.GREATER: "أكبر من",
    ConditionOperator.LESS: "أصغر من",
    ConditionOperator.RANGE: "نطاق",
    ConditionOperator.DEFAULT: "الرسالة الافتراضية",
    ConditionOperator.UNCONDITIONED: "بدون شرط",
}

_DUPLICATE_PRIORITY_ERROR = "هناك أولويات مكررة. كل شرط يجب أن يكون له أولوية فريدة"
_ALL_DISABLED_WARNING = "جميع الشروط معطلة. لن يتم تطبيق أي شروط"
_UNNAMED = "بدون اسم"


def _format_number(raw: RawNumber) -> str:
    number = parse_number(raw)
    if number is None:
        return str(raw)
    return str(int(number)) if number.is_integer() else str(number)


def _interval_start(interval: OffsetInterval) -> float:
    return float("-inf") if interval.lower is None else interval.lower


def detect_range_gaps(conditions: Sequence[MessageCondition]) -> list[int]:
    """Return the first uncovered waiting offset (>= 1) of each coverage hole.

    Only enabled, non-deleted numeric conditions count. Reports ``1`` when
    coverage starts above it, then ``reach + 1`` for each hole between
    sorted intervals. Nothing past the last finite interval is reported.
    """
    intervals = [
        iv for iv in (condition_to_interval(c) for c in conditions if c.is_active)
        if iv is not None
    ]
    if not intervals:
        return []

    gaps: list[int] = []
    reach = 0
    for interval in sorted(intervals, key=_interval_start):
        if interval.lower is not None and interval.lower > reach + 1:
            gaps.append(reach + 1)
        if interval.upper is None:
            break
        reach = max(reach, interval.upper)
    return gaps


def validate_conditions(conditions: Sequence[MessageCondition]) -> ConditionValidation:
    """Check a condition set for errors and warnings before saving."""
    live = [c for c in conditions if not c.is_deleted]
    if not live:
        return ConditionValidation(valid=True)

    errors: list[str] = []
    warnings: list[str] = []

    priorities = [c.priority for c in live]
    if len(set(priorities)) != len(priorities):
        errors.append(_DUPLICATE_PRIORITY_ERROR)

    if not any(c.enabled for c in live):
        warnings.append(_ALL_DISABLED_WARNING)

    for i, first in enumerate(live):
        first_interval = condition_to_interval(first)
        if first_interval is None:
            continue
        for second in live[i + 1:]:
            second_interval = condition_to_interval(second)
            if second_interval is not None and first_interval.overlaps(second_interval):
                warnings.append(
                    f'الشروط "{first.name or _UNNAMED}" و "{second.name or _UNNAMED}" قد تتداخل'
                )

    for gap in detect_range_gaps(live):
        warnings.append(f"هناك فجوة في النطاقات حول الموضع {gap}")

    return ConditionValidation(
        valid=not errors,
        errors=tuple(errors),
        warnings=tuple(warnings),
    )


def is_condition_complete(condition: MessageCondition) -> bool:
    """True when the condition has everything it needs to be saved."""
    if not condition.has_template or condition.priority is None:
        return False

    op = condition.operator
    if op in (ConditionOperator.EQUAL, ConditionOperator.GREATER, ConditionOperator.LESS):
        return parse_number(condition.value) is not None
    if op is ConditionOperator.RANGE:
        lower = parse_number(condition.min_value)
        upper = parse_number(condition.max_value)
        return lower is not None and upper is not None and lower <= upper
    return True


def describe_condition(condition: MessageCondition) -> str:
    """Human-readable (Arabic) description of what a condition matches."""
    label = _OPERATOR_LABELS[condition.operator]
    if condition.operator not in NUMERIC_OPERATORS:
        return label
    if condition.operator is ConditionOperator.RANGE:
        target = f"{_format_number(condition.min_value)} إلى {_format_number(condition.max_value)}"
    else:
        target = _format_number(condition.value)
    return f"موضع الانتظار {label} {target}"


def matching_patients(
    condition: MessageCondition,
    patients: Sequence[Patient],
    current_queue_position: int,
    registry: MatcherRegistry | None = None,
) -> list[Patient]:
    """Waiting patients (offset > 0) this condition alone would message.

    Patients at or before CQP are filtered out before the condition is
    evaluated. Input order is preserved.
    """
    if registry is None:
        registry = MatcherRegistry()
        registry.discover_matchers()
    recipients: list[Patient] = []
    for patient in patients:
        offset = calculate_offset(patient.position, current_queue_position)
        if offset > 0 and registry.matches(offset, condition):
            recipients.append(patient)
    return recipients


def count_matching_patients(
    condition: MessageCondition,
    patients: Sequence[Patient],
    current_queue_position: int,
    registry: MatcherRegistry | None = None,
) -> int:
    """Count waiting patients (offset > 0) this condition alone would match."""
    return len(matching_patients(condition, patients, current_queue_position, registry))
