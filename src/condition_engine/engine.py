"""MessageEngine — the orchestrator that picks and renders each patient's message."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from condition_engine.matchers.base import parse_number
from condition_engine.math.offset import calculate_offset, is_excluded
from condition_engine.models.condition import MessageCondition, Patient, QueueMessageConfig
from condition_engine.models.decision_trace import (
    ConditionResult,
    ConditionStatus,
    ResolutionTrace,
)
from condition_engine.models.enums import (
    NUMERIC_OPERATORS,
    ConditionOperator,
    ResolutionReason,
    ResolutionStage,
)
from condition_engine.models.resolution import MessageResolution, ResolveOptions
from condition_engine.registry import MatcherRegistry
from condition_engine.rendering.placeholders import (
    PlaceholderValues,
    build_placeholder_values,
    render_template,
)

_IndexedCondition = tuple[int, MessageCondition]


def _priority_key(item: _IndexedCondition) -> float:
    """Sort key for priority ordering; unparsable priorities sort last.

    ``sorted`` is stable, so equal priorities keep their list order.
    """
    priority = parse_number(item[1].priority)
    return float("inf") if priority is None else priority


class MessageEngine:
    """Resolves which message template applies to each patient in a queue.

    Stages, evaluated in order and terminal on the first one that yields
    non-blank template text:
        1. EXCLUDED          offset < 0, no template lookup
        2. active conditions EQUAL/GREATER/LESS/RANGE by ascending priority
        3. DEFAULT           first DEFAULT condition with a template
        4. UNCONDITIONED     by ascending priority
        5. global default    ``config.default_template``
        6. NO_MATCH

    Usage:
        engine = MessageEngine()
        resolution = engine.resolve_patient(config, "p1", "Ali", 13, 10)
        resolutions = engine.resolve_patients(config, patients, 10)
        resolution, trace = engine.explain(config, "p1", "Ali", 13, 10)

    The engine keeps no per-call state, so one instance can serve
    concurrent callers.
    """

    def __init__(
        self,
        registry: MatcherRegistry | None = None,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        self.registry = registry or MatcherRegistry()
        self.logger = logger or logging.getLogger(__name__)

        # Auto-discover matchers if using default registry
        if registry is None:
            self.registry.discover_matchers()
        self.registry.ensure_complete()

    def resolve_patient(
        self,
        config: QueueMessageConfig,
        patient_id: str,
        patient_name: str | None,
        patient_position: int,
        current_queue_position: int,
        options: ResolveOptions | None = None,
    ) -> MessageResolution:
        """Resolve a single patient's message.

        Args:
            config: Snapshot of the queue's condition configuration.
            patient_id: Opaque patient identifier, echoed in the result.
            patient_name: Used for ``{PN}``; may be None.
            patient_position: The patient's place in the queue.
            current_queue_position: Position currently being served.
            options: Optional ETS override.

        Returns:
            A MessageResolution; ``reason`` tells which stage decided it.
        """
        resolution, _ = self._resolve(
            config, patient_id, patient_name, patient_position, current_queue_position, options
        )
        return resolution

    def resolve_patients(
        self,
        config: QueueMessageConfig,
        patients: Sequence[Patient],
        current_queue_position: int,
        options: ResolveOptions | None = None,
    ) -> list[MessageResolution]:
        """Resolve many patients at once, preserving input order."""
        resolutions = [
            self.resolve_patient(
                config, p.id, p.name, p.position, current_queue_position, options
            )
            for p in patients
        ]
        self.logger.info(
            "Resolved %d patients at CQP %d (%d with a message)",
            len(resolutions),
            current_queue_position,
            sum(1 for r in resolutions if r.has_message),
        )
        return resolutions

    def explain(
        self,
        config: QueueMessageConfig,
        patient_id: str,
        patient_name: str | None,
        patient_position: int,
        current_queue_position: int,
        options: ResolveOptions | None = None,
    ) -> tuple[MessageResolution, ResolutionTrace]:
        """Resolve one patient and return the full decision trace with it."""
        return self._resolve(
            config, patient_id, patient_name, patient_position, current_queue_position, options
        )

    def _resolve(
        self,
        config: QueueMessageConfig,
        patient_id: str,
        patient_name: str | None,
        patient_position: int,
        current_queue_position: int,
        options: ResolveOptions | None,
    ) -> tuple[MessageResolution, ResolutionTrace]:
        """Core single-patient resolution logic."""
        offset = calculate_offset(patient_position, current_queue_position)
        conditions = config.conditions
        records: dict[int, ConditionResult] = {}

        self.logger.debug(
            "Resolving patient %s: position=%d cqp=%d offset=%d conditions=%d",
            patient_id,
            patient_position,
            current_queue_position,
            offset,
            len(conditions),
        )

        def outcome(
            stage: ResolutionStage,
            reason: ResolutionReason,
            condition_id: str | None = None,
            text: str | None = None,
        ) -> tuple[MessageResolution, ResolutionTrace]:
            resolution = MessageResolution(
                patient_id=patient_id,
                patient_name=patient_name,
                patient_position=patient_position,
                offset=offset,
                reason=reason,
                matched_condition_id=condition_id,
                resolved_template=text,
            )
            trace = ResolutionTrace(
                offset=offset,
                condition_results=self._collect_results(conditions, records),
                deciding_stage=stage,
                final_resolution=resolution,
            )
            return resolution, trace

        active: list[_IndexedCondition] = []
        for index, cond in enumerate(conditions):
            if cond.is_active:
                active.append((index, cond))
            else:
                records[index] = ConditionResult(
                    condition_id=cond.id,
                    operator=cond.operator,
                    status=ConditionStatus.INACTIVE,
                    explanation="Condition is disabled or deleted.",
                )

        # 1. Already served, nothing else is looked at
        if is_excluded(offset):
            return outcome(ResolutionStage.EXCLUSION, ResolutionReason.EXCLUDED)

        ets = options.estimated_time_per_session_minutes if options else None
        values = build_placeholder_values(
            patient_name,
            patient_position,
            current_queue_position,
            offset,
            queue_name=config.queue_name,
            ets_minutes=ets,
        )

        # 2. Numeric conditions by ascending priority
        numeric = sorted(
            (item for item in active if item[1].operator in NUMERIC_OPERATORS),
            key=_priority_key,
        )
        for index, cond in numeric:
            if not self.registry.matches(offset, cond):
                records[index] = ConditionResult(
                    cond.id, cond.operator, ConditionStatus.NOT_MATCHED,
                    f"Offset {offset} does not satisfy {cond.operator.value}.",
                )
                continue
            if not cond.has_template:
                records[index] = self._blank(cond, offset)
                continue
            records[index] = ConditionResult(
                cond.id, cond.operator, ConditionStatus.MATCHED,
                f"Offset {offset} satisfies {cond.operator.value} (priority {cond.priority}).",
            )
            self.logger.debug("Patient %s matched condition %s", patient_id, cond.id)
            return outcome(
                ResolutionStage.ACTIVE_CONDITIONS,
                ResolutionReason.CONDITION,
                cond.id,
                self._render(cond.template, values),
            )

        # 3. Explicit DEFAULT condition, in list order
        for index, cond in active:
            if cond.operator is not ConditionOperator.DEFAULT:
                continue
            if not cond.has_template:
                records[index] = self._blank(cond, offset)
                continue
            records[index] = ConditionResult(
                cond.id, cond.operator, ConditionStatus.MATCHED,
                "No numeric condition applied; using DEFAULT condition.",
            )
            return outcome(
                ResolutionStage.DEFAULT_CONDITION,
                ResolutionReason.DEFAULT,
                cond.id,
                self._render(cond.template, values),
            )

        # 4. UNCONDITIONED as the weakest condition-derived fallback
        unconditioned = sorted(
            (item for item in active if item[1].operator is ConditionOperator.UNCONDITIONED),
            key=_priority_key,
        )
        for index, cond in unconditioned:
            if not cond.has_template:
                records[index] = self._blank(cond, offset)
                continue
            records[index] = ConditionResult(
                cond.id, cond.operator, ConditionStatus.MATCHED,
                "No numeric or DEFAULT condition applied; using UNCONDITIONED.",
            )
            return outcome(
                ResolutionStage.UNCONDITIONED,
                ResolutionReason.CONDITION,
                cond.id,
                self._render(cond.template, values),
            )

        # 5. Queue-wide default template
        if config.has_default_template:
            return outcome(
                ResolutionStage.GLOBAL_DEFAULT,
                ResolutionReason.DEFAULT,
                text=self._render(config.default_template, values),
            )

        self.logger.debug("Patient %s has no applicable template", patient_id)
        return outcome(ResolutionStage.NO_MATCH, ResolutionReason.NO_MATCH)

    def _blank(self, cond: MessageCondition, offset: int) -> ConditionResult:
        """Record a condition that applied but has no template text."""
        self.logger.warning(
            "Condition %s (%s, template %s) applies at offset %d but has no template text; skipping",
            cond.id,
            cond.operator.value,
            cond.template_id,
            offset,
        )
        return ConditionResult(
            cond.id, cond.operator, ConditionStatus.BLANK_TEMPLATE,
            "Condition applied but its template is blank; evaluation continued.",
        )

    @staticmethod
    def _render(template: str | None, values: PlaceholderValues) -> str:
        return render_template(template or "", values)

    @staticmethod
    def _collect_results(
        conditions: Sequence[MessageCondition],
        records: dict[int, ConditionResult],
    ) -> tuple[ConditionResult, ...]:
        """Order results by the config's condition order, filling gaps."""
        return tuple(
            records.get(
                index,
                ConditionResult(cond.id, cond.operator, ConditionStatus.NOT_EVALUATED),
            )
            for index, cond in enumerate(conditions)
        )
