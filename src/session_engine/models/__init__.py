"""Data models for the session recorder core."""

from session_engine.models.draft import Draft, RetroDate
from session_engine.models.enums import DraftState, Period, SetField
from session_engine.models.history_summary import MonthlySummary, PeriodGroup
from session_engine.models.normalized_date import UNKNOWN_DATE, NormalizedDate
from session_engine.models.plan_entry import PlanEntry, PlanFilter
from session_engine.models.session_log import (
    ExerciseLog,
    ExerciseOccurrence,
    SessionKey,
    SessionLog,
    SetLog,
)

__all__ = [
    "Draft",
    "DraftState",
    "ExerciseLog",
    "ExerciseOccurrence",
    "MonthlySummary",
    "NormalizedDate",
    "Period",
    "PeriodGroup",
    "PlanEntry",
    "PlanFilter",
    "RetroDate",
    "SessionKey",
    "SessionLog",
    "SetField",
    "SetLog",
    "UNKNOWN_DATE",
]
