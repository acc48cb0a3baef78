"""Lookups over a session history: last occurrence, calendar membership, search."""

from __future__ import annotations

from typing import Iterable, Optional

from session_engine.history.dates import normalize_date, sort_history
from session_engine.models.session_log import (
    ExerciseLog,
    ExerciseOccurrence,
    SessionLog,
)


def last_occurrence(
    history: Iterable[SessionLog], exercise_name: str
) -> Optional[ExerciseOccurrence]:
    """Most recent recorded performance of *exercise_name*, or None.

    Matches are collected across every session regardless of the plan
    session code they came from. Logs with equal timestamps keep their
    input order.
    """
    matches = [log for log in history if _find_exercise(log, exercise_name)]
    if not matches:
        return None
    latest = sort_history(matches)[0]
    exercise = _find_exercise(latest, exercise_name)
    return ExerciseOccurrence(date=latest.date, sets=exercise.sets, rpe=exercise.rpe)


def has_entry_on(
    history: Iterable[SessionLog], year: int, month0: int, day: int
) -> bool:
    """True if some entry falls on the given local calendar day.

    *month0* is 0-based (January = 0).
    """
    key = f"{year:04d}-{month0 + 1:02d}-{day:02d}"
    return any(normalize_date(log.date).calendar_key == key for log in history)


def search_history(history: Iterable[SessionLog], term: str) -> list[SessionLog]:
    """Entries whose session code or any exercise name contains *term*.

    Case-insensitive; a blank term returns every entry. Input order is kept.
    """
    needle = term.strip().lower()
    if not needle:
        return list(history)
    return [
        log
        for log in history
        if needle in log.session_key.session_code.lower()
        or any(needle in ex.exercise_name.lower() for ex in log.exercises)
    ]


def filter_by_month(
    history: Iterable[SessionLog], year: int, month0: int
) -> list[SessionLog]:
    """Entries dated in the given local month; unknown dates never match."""
    result: list[SessionLog] = []
    for log in history:
        nd = normalize_date(log.date)
        if nd.is_valid and nd.year == year and nd.month == month0:
            result.append(log)
    return result


def _find_exercise(log: SessionLog, exercise_name: str) -> Optional[ExerciseLog]:
    for exercise in log.exercises:
        if exercise.exercise_name == exercise_name:
            return exercise
    return None
