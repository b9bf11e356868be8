"""Shared test fixtures: condition factories, queue configs, patient lists."""

from __future__ import annotations

from typing import Callable

import pytest

from condition_engine.engine import MessageEngine
from condition_engine.models.condition import MessageCondition, Patient, QueueMessageConfig
from condition_engine.models.enums import ConditionOperator


def make_condition(
    condition_id: str,
    operator: ConditionOperator,
    priority: int | None = 1,
    template: str | None = "msg {PN}",
    **kwargs,
) -> MessageCondition:
    """Build a MessageCondition with test-friendly defaults."""
    return MessageCondition(
        id=condition_id,
        operator=operator,
        priority=priority,
        template=template,
        **kwargs,
    )


@pytest.fixture
def condition_factory() -> Callable[..., MessageCondition]:
    return make_condition


@pytest.fixture
def engine() -> MessageEngine:
    return MessageEngine()


@pytest.fixture
def clinic_config() -> QueueMessageConfig:
    """A typical queue: near / mid / far rules plus an explicit DEFAULT."""
    return QueueMessageConfig(
        conditions=(
            make_condition(
                "near", ConditionOperator.RANGE, priority=1,
                template="قريب: {PQP}", min_value=1, max_value=5,
            ),
            make_condition(
                "now", ConditionOperator.EQUAL, priority=2,
                template="حان دورك يا {PN}", value=0,
            ),
            make_condition(
                "far", ConditionOperator.GREATER, priority=3,
                template="أمامك {ETR}", value=5,
            ),
            make_condition(
                "fallback", ConditionOperator.DEFAULT, priority=4,
                template="رسالة افتراضية",
            ),
        ),
        default_template="مرحباً {PN}",
        queue_name="عيادة الأسنان",
    )


@pytest.fixture
def waiting_room() -> list[Patient]:
    """Patients around CQP 10: two served, one in session, three waiting."""
    return [
        Patient(id="p8", name="سارة", position=8),
        Patient(id="p9", name="خالد", position=9),
        Patient(id="p10", name="أحمد", position=10),
        Patient(id="p13", name="منى", position=13),
        Patient(id="p15", name="ليلى", position=15),
        Patient(id="p22", name=None, position=22),
    ]
