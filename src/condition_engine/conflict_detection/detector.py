"""Conflict detector — flags ambiguous condition sets before messages go out.

Advisory only: nothing here changes how the MessageEngine resolves a
patient. Overlap checks look at configuration intent, so priority and
``enabled`` are ignored; soft-deleted conditions are left out since the
editor no longer shows them.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from condition_engine.conflict_detection.intervals import conditions_overlap
from condition_engine.models.condition import MessageCondition
from condition_engine.models.conflict import ConflictInfo, ConflictSummary, OverlapPair
from condition_engine.models.enums import ConditionOperator, ConflictSeverity

logger = logging.getLogger(__name__)

_CONFLICT_PREFIX = "تم اكتشاف تضارب في الشروط: "
_DUPLICATE_DEFAULT_MESSAGE = "يوجد أكثر من شرط افتراضي مفعّل"
_JOINER = " و "


def _label(condition: MessageCondition, index: int) -> str:
    """Display label: the condition's name, else its 1-based list slot."""
    return condition.name or f"شرط {index + 1}"


class ConflictDetector:
    """Scans a condition list for overlapping intervals and duplicate DEFAULTs.

    Usage:
        detector = ConflictDetector()
        info = detector.detect(conditions)
        if info.has_conflict:
            warn(info.message)
    """

    def detect_overlaps(self, conditions: Sequence[MessageCondition]) -> list[OverlapPair]:
        """Return every overlapping pair, in list order (i < j)."""
        candidates = [(i, c) for i, c in enumerate(conditions) if not c.is_deleted]
        overlaps: list[OverlapPair] = []
        for pos, (i, first) in enumerate(candidates):
            for j, second in candidates[pos + 1:]:
                if conditions_overlap(first, second):
                    overlaps.append(
                        OverlapPair(
                            first_id=first.id,
                            second_id=second.id,
                            description=(
                                f'الشرط "{_label(first, i)}" يتداخل مع "{_label(second, j)}"'
                            ),
                        )
                    )
        return overlaps

    def default_conditions(self, conditions: Sequence[MessageCondition]) -> list[MessageCondition]:
        """Enabled, non-deleted DEFAULT conditions in list order."""
        return [
            c for c in conditions
            if c.operator is ConditionOperator.DEFAULT and c.is_active
        ]

    def has_default_conflict(self, conditions: Sequence[MessageCondition]) -> bool:
        """True when more than one enabled DEFAULT condition exists."""
        return len(self.default_conditions(conditions)) > 1

    def summarize(self, conditions: Sequence[MessageCondition]) -> ConflictSummary:
        """Count overlaps and the duplicate-DEFAULT conflict."""
        overlaps = self.detect_overlaps(conditions)
        default_conflict = self.has_default_conflict(conditions)
        return ConflictSummary(
            has_overlaps=bool(overlaps),
            has_default_conflict=default_conflict,
            overlapping_pairs=tuple(overlaps),
            total_conflicts=len(overlaps) + (1 if default_conflict else 0),
        )

    def detect(self, conditions: Sequence[MessageCondition]) -> ConflictInfo:
        """Build the operator-facing warning for *conditions*.

        ``conflicting_ids`` lists each involved condition once, in the
        order it was first implicated.
        """
        summary = self.summarize(conditions)
        if summary.total_conflicts == 0:
            return ConflictInfo(has_conflict=False)

        ids: list[str] = []
        reasons: list[str] = []
        for pair in summary.overlapping_pairs:
            for condition_id in (pair.first_id, pair.second_id):
                if condition_id not in ids:
                    ids.append(condition_id)
            if pair.description not in reasons:
                reasons.append(pair.description)

        if summary.has_default_conflict:
            for cond in self.default_conditions(conditions):
                if cond.id not in ids:
                    ids.append(cond.id)
            reasons.append(_DUPLICATE_DEFAULT_MESSAGE)

        logger.info(
            "Detected %d condition conflict(s) involving %d condition(s)",
            summary.total_conflicts,
            len(ids),
        )
        return ConflictInfo(
            has_conflict=True,
            conflicting_ids=tuple(ids),
            message=_CONFLICT_PREFIX + _JOINER.join(reasons),
            severity=ConflictSeverity.WARNING,
            has_default_conflict=summary.has_default_conflict,
        )
