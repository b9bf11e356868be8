"""Conflict detection outputs — advisory reports for the condition editor."""

from __future__ import annotations

from dataclasses import dataclass, field

from condition_engine.models.enums import ConflictSeverity


@dataclass(frozen=True)
class OffsetInterval:
    """Closed offset interval; ``None`` bounds stand for ±infinity."""

    lower: int | None
    upper: int | None

    def overlaps(self, other: OffsetInterval) -> bool:
        """True unless one interval ends strictly before the other starts."""
        if self.upper is not None and other.lower is not None and self.upper < other.lower:
            return False
        if other.upper is not None and self.lower is not None and other.upper < self.lower:
            return False
        return True


@dataclass(frozen=True)
class OverlapPair:
    """Two conditions whose offset intervals intersect."""

    first_id: str
    second_id: str
    description: str = ""

    def involves(self, condition_id: str) -> bool:
        return condition_id in (self.first_id, self.second_id)


@dataclass(frozen=True)
class ConflictSummary:
    """Aggregate conflict counts over a condition list."""

    has_overlaps: bool
    has_default_conflict: bool
    overlapping_pairs: tuple[OverlapPair, ...] = field(default_factory=tuple)
    total_conflicts: int = 0


@dataclass(frozen=True)
class ConflictInfo:
    """Warning payload surfaced to the operator before sending messages."""

    has_conflict: bool
    conflicting_ids: tuple[str, ...] = field(default_factory=tuple)
    message: str = ""
    severity: ConflictSeverity = ConflictSeverity.WARNING
    has_default_conflict: bool = False


@dataclass(frozen=True)
class ConditionValidation:
    """Editor-time validation verdict: errors block saving, warnings don't."""

    valid: bool
    errors: tuple[str, ...] = field(default_factory=tuple)
    warnings: tuple[str, ...] = field(default_factory=tuple)
