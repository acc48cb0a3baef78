"""The in-flight session draft, an explicit value owned by the Draft Engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from session_engine.models.enums import UNSAVED_LOG_ID
from session_engine.models.plan_entry import PlanEntry
from session_engine.models.session_log import ExerciseLog, SessionKey


@dataclass(frozen=True)
class Draft:
    """Snapshot of a session being recorded.

    Every mutation produces a new Draft via ``dataclasses.replace``; the
    ``exercises`` tuple keeps its length and per-exercise set counts for
    the whole life of the draft.
    """

    log_id: str
    started_at: datetime
    session_key: SessionKey
    exercises: tuple[ExerciseLog, ...]
    plan_entries: tuple[PlanEntry, ...] = field(default_factory=tuple)
    comments: dict[str, str] = field(default_factory=dict)
    original_date: str | None = None  # date of the edited log, edit mode only

    @property
    def is_edit_mode(self) -> bool:
        """True when the draft replaces an already persisted log."""
        return bool(self.log_id) and self.log_id != UNSAVED_LOG_ID

    @property
    def total_sets(self) -> int:
        return sum(len(ex.sets) for ex in self.exercises)

    @property
    def completed_sets(self) -> int:
        return sum(ex.completed_sets for ex in self.exercises)


@dataclass(frozen=True)
class RetroDate:
    """User-chosen calendar day for a backfilled session.

    Each part is None until chosen in the date picker.
    """

    day: int | None = None
    month: int | None = None  # 1-12
    year: int | None = None

    @property
    def is_complete(self) -> bool:
        return bool(self.day) and bool(self.month) and bool(self.year)
