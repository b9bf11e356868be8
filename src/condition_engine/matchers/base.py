"""Abstract base class for all condition matchers."""

from __future__ import annotations

import math
import numbers
from abc import ABC, abstractmethod

from condition_engine.models.condition import MessageCondition, RawNumber
from condition_engine.models.enums import ConditionOperator


def parse_number(raw: RawNumber) -> float | None:
    """Parse a raw condition field into a finite number.

    Ints, floats and numeric strings are accepted. Booleans, blanks, NaN,
    infinities and anything unparsable return None.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, numbers.Real):
        number = float(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


class ConditionMatcher(ABC):
    """Base class for the per-operator matching predicates.

    Each matcher owns exactly one numeric operator. Matchers are discovered
    automatically by the MatcherRegistry and called by the MessageEngine.

    Subclasses must define:
        operator: the ConditionOperator this matcher handles
        required_fields: MessageCondition field names that must parse to
            finite numbers
        compare(): the numeric predicate, given the parsed fields in
            ``required_fields`` order
    """

    operator: ConditionOperator
    required_fields: tuple[str, ...]

    def parsed_fields(self, condition: MessageCondition) -> tuple[float, ...] | None:
        """Parse every required field, or None if any is not a finite number."""
        values: list[float] = []
        for field_name in self.required_fields:
            number = parse_number(getattr(condition, field_name, None))
            if number is None:
                return None
            values.append(number)
        return tuple(values)

    def matches(self, offset: int, condition: MessageCondition) -> bool:
        """Evaluate this matcher against *offset*.

        A condition with missing or non-numeric fields never matches.
        """
        values = self.parsed_fields(condition)
        if values is None:
            return False
        return self.compare(offset, *values)

    @abstractmethod
    def compare(self, offset: int, *values: float) -> bool:
        """Return True if *offset* satisfies the operator for *values*."""
        ...
