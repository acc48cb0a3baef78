"""Shared test fixtures: plan rows, session logs, a fixed local clock."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

import pytest

from session_engine.draft.slot import DraftSlot
from session_engine.models.plan_entry import PlanEntry
from session_engine.models.session_log import (
    ExerciseLog,
    SessionKey,
    SessionLog,
    SetLog,
)


@pytest.fixture
def as_of() -> datetime:
    """Saturday 15 June 2024, noon local time."""
    return datetime(2024, 6, 15, 12, 0)


@pytest.fixture
def plan_entries() -> list[PlanEntry]:
    """Week 2 of June 2024: session A (squat, bench) and session B (deadlift)."""
    return [
        PlanEntry(
            exercise_name="Back Squat",
            session_code="A",
            target_sets="4",
            target_reps="6",
            rest_seconds=180,
            tempo_rpe="3-1-1 @8",
            year=2024,
            month_num=6,
            week=2,
            order=1,
        ),
        PlanEntry(
            exercise_name="Bench Press",
            session_code="A",
            target_sets="3-4-5",
            target_reps="8",
            year=2024,
            month_num=6,
            week=2,
            order=2,
        ),
        PlanEntry(
            exercise_name="Deadlift",
            session_code="B",
            target_sets="AMRAP",
            target_reps="5",
            year=2024,
            month_num=6,
            week=2,
            order=3,
        ),
    ]


@pytest.fixture
def log_factory() -> Callable[..., SessionLog]:
    """Factory fixture for persisted SessionLog instances.

    Usage:
        log = log_factory("2024-06-14T18:00:00", exercises=("Back Squat",))
    """

    def factory(
        date: str,
        log_id: str | None = None,
        exercises: tuple[str, ...] = ("Back Squat",),
        session_code: str = "A",
        duration_minutes: int | None = 45,
        session_rpe: int | None = None,
        reps: str = "5",
        weight: str = "100",
    ) -> SessionLog:
        return SessionLog(
            id=log_id or f"log-{date}",
            date=date,
            session_key=SessionKey(
                year=2024, month_num=6, week=2, session_code=session_code
            ),
            exercises=tuple(
                ExerciseLog(
                    exercise_name=name,
                    original_session=session_code,
                    sets=(
                        SetLog(1, reps=reps, weight=weight, completed=True),
                        SetLog(2),
                    ),
                )
                for name in exercises
            ),
            duration_minutes=duration_minutes,
            session_rpe=session_rpe,
        )

    return factory


@pytest.fixture
def slot(tmp_path) -> DraftSlot:
    return DraftSlot(tmp_path / "active_session.json")


class FakeClock:
    """Manually advanced clock for SessionRecorder tests."""

    def __init__(self, now: datetime) -> None:
        self.now = now.astimezone()

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock(as_of) -> FakeClock:
    return FakeClock(as_of)
