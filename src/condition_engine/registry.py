"""Matcher registry with auto-discovery of ConditionMatcher subclasses."""

from __future__ import annotations

import importlib
import logging
import pkgutil

from condition_engine.matchers.base import ConditionMatcher
from condition_engine.models.condition import MessageCondition
from condition_engine.models.enums import NUMERIC_OPERATORS, ConditionOperator

logger = logging.getLogger(__name__)


class MatcherRegistry:
    """Discovers and manages ConditionMatcher implementations.

    Auto-discovers matchers by scanning the matchers/ package for concrete
    subclasses of ConditionMatcher. Exactly one matcher is kept per operator;
    ``ensure_complete()`` fails loudly if a numeric operator has none, so a
    new operator cannot silently fall through to "never matches".
    """

    def __init__(self) -> None:
        self._matchers: dict[ConditionOperator, ConditionMatcher] = {}

    def discover_matchers(self) -> None:
        """Scan the matchers package and register all ConditionMatcher subclasses."""
        import condition_engine.matchers as matchers_pkg

        self._scan_package(matchers_pkg.__name__, list(matchers_pkg.__path__))

    def _scan_package(self, package_name: str, package_path: list[str]) -> None:
        """Import every module under a package and register matchers."""
        for _, module_name, _ in pkgutil.walk_packages(
            package_path, prefix=package_name + "."
        ):
            module = importlib.import_module(module_name)

            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type)
                    and issubclass(attr, ConditionMatcher)
                    and attr is not ConditionMatcher
                    and not getattr(attr, "__abstractmethods__", set())
                ):
                    self.register(attr())

    def register(self, matcher: ConditionMatcher) -> None:
        """Register a matcher instance under its operator."""
        if matcher.operator not in NUMERIC_OPERATORS:
            raise ValueError(
                f"{type(matcher).__name__} targets {matcher.operator.value}, "
                "which is resolved as a fallback stage, not by a matcher"
            )
        self._matchers[matcher.operator] = matcher
        logger.debug("Registered %s for %s", type(matcher).__name__, matcher.operator.value)

    def get(self, operator: ConditionOperator) -> ConditionMatcher | None:
        """Retrieve the matcher for *operator*."""
        return self._matchers.get(operator)

    def ensure_complete(self) -> None:
        """Raise LookupError if any numeric operator lacks a matcher."""
        missing = sorted(op.value for op in NUMERIC_OPERATORS if op not in self._matchers)
        if missing:
            raise LookupError(f"No matcher registered for: {', '.join(missing)}")

    def matches(self, offset: int, condition: MessageCondition) -> bool:
        """Evaluate *condition* against *offset*.

        DEFAULT and UNCONDITIONED never match here; the engine resolves them
        as later fallback stages.
        """
        if condition.operator not in NUMERIC_OPERATORS:
            return False
        matcher = self._matchers.get(condition.operator)
        if matcher is None:
            raise LookupError(f"No matcher registered for {condition.operator.value}")
        return matcher.matches(offset, condition)

    @property
    def operators(self) -> list[ConditionOperator]:
        """List all registered operators."""
        return list(self._matchers.keys())
