"""Estimated time remaining (ETR) for a waiting patient.

ETR = offset × ETS, where ETS is the assumed number of minutes each served
patient consumes. Patients currently being served (offset 0) wait 0 minutes.
"""

from __future__ import annotations

import math

from condition_engine.models.enums import (
    AND_WORD,
    DEFAULT_ETS_MINUTES,
    HOUR_WORD,
    MINUTE_WORD,
    MINUTES_PER_HOUR,
)


def estimate_minutes_remaining(offset: int, ets_minutes: int | float | None = None) -> float:
    """Return the estimated minutes until *offset* reaches the front.

    Args:
        offset: Signed distance from the currently served position.
        ets_minutes: Minutes per session. ``None`` uses the 15-minute default.

    Returns:
        ``offset * ets`` for non-negative offsets, otherwise 0.
    """
    ets = DEFAULT_ETS_MINUTES if ets_minutes is None else ets_minutes
    return offset * ets if offset >= 0 else 0


def format_minutes(minutes: int | float) -> str:
    """Format a minute count as Arabic hours and minutes.

    The total is rounded half-up to whole minutes and floored at zero. A zero hour
    or minute component is omitted:
        45  -> "45 دقيقة"
        60  -> "1 ساعة"
        75  -> "1 ساعة و 15 دقيقة"
    """
    total = max(0, math.floor(minutes + 0.5))
    hours, rem = divmod(total, MINUTES_PER_HOUR)
    if hours == 0:
        return f"{rem} {MINUTE_WORD}"
    if rem == 0:
        return f"{hours} {HOUR_WORD}"
    return f"{hours} {HOUR_WORD} {AND_WORD} {rem} {MINUTE_WORD}"


def format_time_remaining(offset: int, ets_minutes: int | float | None = None) -> str:
    """Render the ``{ETR}`` placeholder value for a patient at *offset*."""
    if offset == 0:
        return f"0 {MINUTE_WORD}"
    return format_minutes(estimate_minutes_remaining(offset, ets_minutes))
