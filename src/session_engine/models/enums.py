"""Enumerations and constants for the session recorder core."""

from enum import Enum, IntEnum, auto


class DraftState(IntEnum):
    """Lifecycle of the single in-flight session draft."""

    UNINITIALIZED = auto()
    DRAFTING = auto()
    FINALIZING = auto()
    SAVED = auto()
    CANCELLED = auto()


class SetField(str, Enum):
    """Athlete-editable fields of a SetLog."""

    REPS = "reps"
    WEIGHT = "weight"


class Period(IntEnum):
    """History grouping periods, most recent first."""

    TODAY = auto()
    THIS_WEEK = auto()
    LAST_WEEK = auto()
    OLDER = auto()


# ---------------------------------------------------------------------------
# Draft / finalize constants
# ---------------------------------------------------------------------------

# Reserved id of a draft that has never been persisted
UNSAVED_LOG_ID = "temp"

# Set count used when a plan's target-sets text cannot be parsed
DEFAULT_SET_COUNT = 3

# Separator between merged plan session codes in a SessionKey
SESSION_CODE_JOINER = "+"

# Comments key of a whole-session remark. Older rows (manual entries,
# imported activities) stored one free-text comment for the session
# instead of a per-exercise map; no exercise name is empty
SESSION_COMMENT_KEY = ""

# Backfilled sessions have no meaningful elapsed time
RETROACTIVE_DURATION_MIN = 60

# Retroactive timestamps are anchored at local noon so that the UTC
# serialization never lands on a neighbouring calendar day
RETROACTIVE_ANCHOR_HOUR = 12

# Rate of perceived exertion bounds (Borg CR-10)
RPE_MIN = 1
RPE_MAX = 10

# ---------------------------------------------------------------------------
# History constants
# ---------------------------------------------------------------------------

# Legacy records append a human annotation after this separator
LEGACY_ANNOTATION_SEPARATOR = " - "

# Day-first formats tried, in order, on legacy slash dates
LEGACY_DATE_FORMATS = ("%d-%m-%Y", "%Y-%m-%d")

# Sentinel parts of an unparseable date
UNKNOWN_YEAR = 0
UNKNOWN_MONTH = "--"
UNKNOWN_DAY = "---"

# Trailing window of the weekly session count, in days
WEEKLY_WINDOW_DAYS = 7

# Slack, in days, tolerated per step of the training streak
STREAK_TOLERANCE_DAYS = 1

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
