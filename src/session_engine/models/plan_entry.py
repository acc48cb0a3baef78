"""Plan entries: one coach-authored prescription row per exercise."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PlanEntry:
    """A single exercise prescription from the training plan.

    Sourced from the remote datastore and never mutated by the core.
    ``target_sets`` is free text: a plain integer ("4") or a
    hyphen-separated progression ("3-4-5").
    """

    exercise_name: str
    session_code: str
    target_sets: str = ""
    target_reps: str = ""
    rest_seconds: int | None = None
    tempo_rpe: str = ""
    coach_notes: str = ""
    video_url: str | None = None
    year: int = 0
    month_num: int = 0
    week: int = 0
    order: int = 0


@dataclass(frozen=True)
class PlanFilter:
    """Selection of plan rows: one year/month/week and one or more sessions."""

    year: int
    month_num: int
    week: int
    session_codes: tuple[str, ...] = field(default_factory=tuple)
