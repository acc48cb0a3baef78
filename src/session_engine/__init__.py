"""Session recorder core: drafting, finalizing and reconciling workout logs."""

from session_engine.draft import DraftSlot, SessionRecorder, finalize
from session_engine.exceptions import (
    DraftSlotError,
    DraftStateError,
    FinalizeInProgressError,
    IncompleteDateError,
    InvalidRetroDateError,
    InvalidRpeError,
    SessionEngineError,
)

__all__ = [
    "DraftSlot",
    "DraftSlotError",
    "DraftStateError",
    "FinalizeInProgressError",
    "IncompleteDateError",
    "InvalidRetroDateError",
    "InvalidRpeError",
    "SessionEngineError",
    "SessionRecorder",
    "finalize",
]
