"""Draft Engine and Finalizer: recording a session set by set."""

from session_engine.draft.engine import SessionRecorder
from session_engine.draft.finalizer import finalize
from session_engine.draft.slot import DraftSlot

__all__ = ["DraftSlot", "SessionRecorder", "finalize"]
