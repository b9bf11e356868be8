"""Queue offset calculations.

Offset model: a patient's signed distance from the position currently
being served (CQP).
    offset < 0  → already served, always excluded
    offset == 0 → currently being served
    offset > 0  → waiting
"""

from __future__ import annotations

from collections.abc import Iterable

from condition_engine.models.condition import QueueSummary


def calculate_offset(patient_position: int, current_queue_position: int) -> int:
    """Return ``patient_position - current_queue_position``.

    Callers must not invoke the engine without a known CQP; no check is
    made here.
    """
    return patient_position - current_queue_position


def is_excluded(offset: int) -> bool:
    """True for patients already served (negative offset)."""
    return offset < 0


def is_being_served(offset: int) -> bool:
    return offset == 0


def format_position_display(position: int, current_queue_position: int | None = None) -> str:
    """Format a position with its offset from CQP for display.

    Examples:
        format_position_display(5, 3)  -> "5 (+2)"
        format_position_display(2, 3)  -> "2 (-1)"
        format_position_display(3, 3)  -> "3 (CQP)"
        format_position_display(5)     -> "5"
    """
    if current_queue_position is None:
        return str(position)

    offset = calculate_offset(position, current_queue_position)
    if offset == 0:
        return f"{position} (CQP)"

    sign = "+" if offset > 0 else ""
    return f"{position} ({sign}{offset})"


def summarize_queue(positions: Iterable[int], current_queue_position: int) -> QueueSummary:
    """Count positions on either side of CQP and list the holes between them.

    Example:
        summarize_queue([3, 5, 6, 9], 5)
        -> total 4, after 2, before 1, at CQP, gaps (4, 7, 8), offsets -2..4
    """
    ordered = sorted(positions)
    if not ordered:
        return QueueSummary(total_positions=0, after_cqp=0, before_cqp=0, at_cqp=False)

    gaps: list[int] = []
    for current, following in zip(ordered, ordered[1:]):
        gaps.extend(range(current + 1, following))

    return QueueSummary(
        total_positions=len(ordered),
        after_cqp=sum(1 for p in ordered if p > current_queue_position),
        before_cqp=sum(1 for p in ordered if p < current_queue_position),
        at_cqp=current_queue_position in ordered,
        gaps=tuple(gaps),
        min_offset=calculate_offset(ordered[0], current_queue_position),
        max_offset=calculate_offset(ordered[-1], current_queue_position),
    )
