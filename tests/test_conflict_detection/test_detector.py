"""Tests for ConflictDetector — overlapping intervals and duplicate DEFAULTs."""

from __future__ import annotations

import itertools

from condition_engine.conflict_detection.detector import ConflictDetector
from condition_engine.models.condition import MessageCondition
from condition_engine.models.enums import ConditionOperator, ConflictSeverity


def _cond(
    condition_id: str,
    operator: ConditionOperator,
    name: str | None = None,
    **kwargs,
) -> MessageCondition:
    return MessageCondition(
        id=condition_id, operator=operator, priority=1, template="t", name=name, **kwargs
    )


class TestConflictDetector:
    def setup_method(self) -> None:
        self.detector = ConflictDetector()

    def test_equal_inside_range_is_flagged(self) -> None:
        conditions = [
            _cond("eq5", ConditionOperator.EQUAL, value=5),
            _cond("r510", ConditionOperator.RANGE, min_value=5, max_value=10),
        ]
        info = self.detector.detect(conditions)
        assert info.has_conflict
        assert set(info.conflicting_ids) == {"eq5", "r510"}
        assert info.severity == ConflictSeverity.WARNING
        assert info.message

    def test_disjoint_conditions_have_no_conflict(self) -> None:
        conditions = [
            _cond("near", ConditionOperator.RANGE, min_value=1, max_value=5),
            _cond("far", ConditionOperator.GREATER, value=5),
            _cond("dflt", ConditionOperator.DEFAULT),
        ]
        info = self.detector.detect(conditions)
        assert not info.has_conflict
        assert info.conflicting_ids == ()
        assert info.message == ""

    def test_two_enabled_defaults_conflict(self) -> None:
        conditions = [
            _cond("d1", ConditionOperator.DEFAULT),
            _cond("d2", ConditionOperator.DEFAULT),
        ]
        assert self.detector.has_default_conflict(conditions)
        info = self.detector.detect(conditions)
        assert info.has_default_conflict
        assert info.conflicting_ids == ("d1", "d2")

    def test_disabled_default_does_not_count(self) -> None:
        conditions = [
            _cond("d1", ConditionOperator.DEFAULT),
            _cond("d2", ConditionOperator.DEFAULT, enabled=False),
        ]
        assert not self.detector.has_default_conflict(conditions)

    def test_disabled_conditions_still_overlap(self) -> None:
        conditions = [
            _cond("a", ConditionOperator.EQUAL, value=3, enabled=False),
            _cond("b", ConditionOperator.LESS, value=5),
        ]
        assert self.detector.detect(conditions).has_conflict

    def test_deleted_conditions_are_ignored(self) -> None:
        conditions = [
            _cond("a", ConditionOperator.EQUAL, value=3, is_deleted=True),
            _cond("b", ConditionOperator.LESS, value=5),
        ]
        assert not self.detector.detect(conditions).has_conflict

    def test_overlap_description_uses_names_then_slots(self) -> None:
        conditions = [
            _cond("a", ConditionOperator.EQUAL, name="قريب", value=3),
            _cond("b", ConditionOperator.LESS, value=5),
        ]
        (pair,) = self.detector.detect_overlaps(conditions)
        assert "قريب" in pair.description
        assert "شرط 2" in pair.description

    def test_overlap_is_symmetric(self) -> None:
        conditions = [
            _cond("eq", ConditionOperator.EQUAL, value=4),
            _cond("rng", ConditionOperator.RANGE, min_value=2, max_value=6),
            _cond("gt", ConditionOperator.GREATER, value=5),
            _cond("lt", ConditionOperator.LESS, value=2),
        ]
        for a, b in itertools.permutations(conditions, 2):
            forward = bool(self.detector.detect_overlaps([a, b]))
            backward = bool(self.detector.detect_overlaps([b, a]))
            assert forward == backward

    def test_summary_counts_all_conflicts(self) -> None:
        conditions = [
            _cond("a", ConditionOperator.RANGE, min_value=1, max_value=5),
            _cond("b", ConditionOperator.RANGE, min_value=3, max_value=8),
            _cond("c", ConditionOperator.EQUAL, value=4),
            _cond("d1", ConditionOperator.DEFAULT),
            _cond("d2", ConditionOperator.DEFAULT),
        ]
        summary = self.detector.summarize(conditions)
        assert summary.has_overlaps
        assert summary.has_default_conflict
        assert len(summary.overlapping_pairs) == 3
        assert summary.total_conflicts == 4

    def test_conflicting_ids_are_unique(self) -> None:
        conditions = [
            _cond("a", ConditionOperator.RANGE, min_value=1, max_value=10),
            _cond("b", ConditionOperator.EQUAL, value=2),
            _cond("c", ConditionOperator.EQUAL, value=3),
        ]
        info = self.detector.detect(conditions)
        assert info.conflicting_ids == ("a", "b", "c")

    def test_empty_list(self) -> None:
        assert not self.detector.detect([]).has_conflict
