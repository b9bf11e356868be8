"""Enumerations and display constants for the condition engine."""

from enum import Enum, IntEnum, auto


class ConditionOperator(str, Enum):
    """Closed set of operators a message condition can carry.

    Values match the upstream payload so the enum round-trips through JSON
    without a lookup table.
    """

    EQUAL = "EQUAL"
    GREATER = "GREATER"
    LESS = "LESS"
    RANGE = "RANGE"
    DEFAULT = "DEFAULT"
    UNCONDITIONED = "UNCONDITIONED"


# Operators that carry a numeric criterion and go through a matcher.
NUMERIC_OPERATORS = frozenset({
    ConditionOperator.EQUAL,
    ConditionOperator.GREATER,
    ConditionOperator.LESS,
    ConditionOperator.RANGE,
})

# Operators resolved as fallback stages after the numeric scan.
FALLBACK_OPERATORS = frozenset({
    ConditionOperator.DEFAULT,
    ConditionOperator.UNCONDITIONED,
})


class ResolutionReason(str, Enum):
    """Why a patient ended up with (or without) a message."""

    EXCLUDED = "EXCLUDED"
    CONDITION = "CONDITION"
    DEFAULT = "DEFAULT"
    NO_MATCH = "NO_MATCH"


class ResolutionStage(IntEnum):
    """Resolver stages in evaluation order."""

    EXCLUSION = auto()
    ACTIVE_CONDITIONS = auto()
    DEFAULT_CONDITION = auto()
    UNCONDITIONED = auto()
    GLOBAL_DEFAULT = auto()
    NO_MATCH = auto()


class ConflictSeverity(str, Enum):
    """Severity attached to an advisory conflict report."""

    WARNING = "warning"
    ERROR = "error"


# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------
# Assumed minutes consumed per served patient when the caller gives none.
DEFAULT_ETS_MINUTES = 15

MINUTES_PER_HOUR = 60

# Arabic unit words used in the ETR placeholder.
MINUTE_WORD = "دقيقة"
HOUR_WORD = "ساعة"
AND_WORD = "و"

# ---------------------------------------------------------------------------
# Placeholders
# ---------------------------------------------------------------------------
PATIENT_NAME_TOKEN = "{PN}"
PATIENT_POSITION_TOKEN = "{PQP}"
CURRENT_POSITION_TOKEN = "{CQP}"
TIME_REMAINING_TOKEN = "{ETR}"
DEPARTMENT_NAME_TOKEN = "{DN}"
CLINIC_NAME_TOKEN = "{CN}"

SUPPORTED_PLACEHOLDERS = (
    PATIENT_NAME_TOKEN,
    PATIENT_POSITION_TOKEN,
    CURRENT_POSITION_TOKEN,
    TIME_REMAINING_TOKEN,
    DEPARTMENT_NAME_TOKEN,
    CLINIC_NAME_TOKEN,
)
