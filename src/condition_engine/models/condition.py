"""Condition configuration snapshot — what the CRUD layer hands the engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from condition_engine.models.enums import ConditionOperator

# Raw numeric field as received upstream; parsed lazily by the matchers.
RawNumber = Union[int, float, str, None]


@dataclass(frozen=True)
class MessageCondition:
    """A single prioritized rule that maps a queue offset to a template.

    ``value`` is used by EQUAL/GREATER/LESS, ``min_value``/``max_value`` by
    RANGE. DEFAULT and UNCONDITIONED carry no numeric criterion. Lower
    ``priority`` is evaluated first; a missing priority sorts last.
    """

    id: str
    operator: ConditionOperator
    priority: int | None = None
    template: str | None = None

    value: RawNumber = None
    min_value: RawNumber = None
    max_value: RawNumber = None

    enabled: bool = True
    is_deleted: bool = False

    # Display metadata, not used in matching
    template_id: str | None = None
    name: str | None = None

    @property
    def is_active(self) -> bool:
        """True when the condition takes part in resolution at all."""
        return self.enabled and not self.is_deleted

    @property
    def has_template(self) -> bool:
        """True when the template holds non-whitespace text."""
        return bool(self.template and self.template.strip())


@dataclass(frozen=True)
class QueueMessageConfig:
    """One queue's condition set plus its global fallback template."""

    conditions: tuple[MessageCondition, ...] = field(default_factory=tuple)
    default_template: str | None = None
    queue_name: str | None = None

    @property
    def has_default_template(self) -> bool:
        return bool(self.default_template and self.default_template.strip())


@dataclass(frozen=True)
class Patient:
    """Minimal patient record needed for batch resolution."""

    id: str
    position: int
    name: str | None = None


@dataclass(frozen=True)
class QueueSummary:
    """Snapshot of occupied positions relative to CQP.

    ``gaps`` lists the empty positions between the lowest and highest
    occupied ones. The offset bounds are None for an empty queue.
    """

    total_positions: int
    after_cqp: int
    before_cqp: int
    at_cqp: bool
    gaps: tuple[int, ...] = field(default_factory=tuple)
    min_offset: int | None = None
    max_offset: int | None = None
