"""Session log records: the output of the Finalizer and input of the Reconciler."""

from __future__ import annotations

from dataclasses import dataclass, field

from session_engine.models.enums import UNSAVED_LOG_ID


@dataclass(frozen=True)
class SetLog:
    """One performed (or pending) set.

    ``reps`` and ``weight`` are opaque text: "AMRAP" and "BW" are valid.
    """

    set_number: int
    reps: str = ""
    weight: str = ""
    completed: bool = False


@dataclass(frozen=True)
class ExerciseLog:
    """All sets of one exercise within a session.

    ``original_session`` is the plan session code the exercise came from,
    since one recording can merge several plan sessions.
    """

    exercise_name: str
    original_session: str = ""
    notes: str = ""
    sets: tuple[SetLog, ...] = field(default_factory=tuple)
    rpe: int | None = None

    @property
    def completed_sets(self) -> int:
        return sum(1 for s in self.sets if s.completed)


@dataclass(frozen=True)
class SessionKey:
    """Display/grouping key of a session; not a uniqueness constraint."""

    year: int = 0
    month_num: int = 0
    week: int = 0
    session_code: str = ""


@dataclass(frozen=True)
class SessionLog:
    """A recorded training session.

    Immutable once built by the Finalizer. Editing goes back through the
    Draft Engine and yields a replacement carrying the same ``id``.
    """

    id: str
    date: str
    session_key: SessionKey
    exercises: tuple[ExerciseLog, ...] = field(default_factory=tuple)
    duration_minutes: int | None = None
    comments: dict[str, str] = field(default_factory=dict)
    session_rpe: int | None = None

    @property
    def is_persisted(self) -> bool:
        """False for a draft snapshot still carrying the sentinel id."""
        return bool(self.id) and self.id != UNSAVED_LOG_ID


@dataclass(frozen=True)
class ExerciseOccurrence:
    """Most recent performance of an exercise, for in-session reference."""

    date: str
    sets: tuple[SetLog, ...]
    rpe: int | None = None
