"""Session-count aggregates, training streak and completion rates.

All time-relative functions take an optional *as_of* datetime (naive
values are local time) so results are reproducible in tests.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Iterable, Optional

import numpy as np

from session_engine.history.dates import local_date, parse_timestamp, sort_history
from session_engine.models.enums import STREAK_TOLERANCE_DAYS, WEEKLY_WINDOW_DAYS
from session_engine.models.history_summary import MonthlySummary
from session_engine.models.session_log import SessionLog


def weekly_count(history: Iterable[SessionLog], as_of: Optional[datetime] = None) -> int:
    """Entries timestamped less than 7×24h before *as_of*.

    A continuous trailing window, not a calendar week. Unparseable dates
    are not counted.
    """
    now = _local_now(as_of)
    window = timedelta(days=WEEKLY_WINDOW_DAYS)
    count = 0
    for log in history:
        ts = parse_timestamp(log.date)
        if ts is not None and now - ts < window:
            count += 1
    return count


def monthly_summary(
    history: Iterable[SessionLog], as_of: Optional[datetime] = None
) -> MonthlySummary:
    """Count, total minutes and mean session RPE for the current local month."""
    now = _local_now(as_of)
    this_month: list[SessionLog] = []
    for log in history:
        day = local_date(log.date)
        if day is not None and day.year == now.year and day.month == now.month:
            this_month.append(log)
    rpes = [log.session_rpe for log in this_month if log.session_rpe is not None]
    average_rpe: float | None = None
    if rpes:
        average_rpe = round_half_up(float(np.mean(rpes)), 1)
    return MonthlySummary(
        session_count=len(this_month),
        total_minutes=sum(log.duration_minutes or 0 for log in this_month),
        average_rpe=average_rpe,
    )


def training_streak(
    history: Iterable[SessionLog], as_of: Optional[datetime] = None
) -> int:
    """Lenient count of consecutive training days ending today.

    Entries are taken most recent first; the i-th entry (0-based) is
    expected on ``today - i`` days and counts while it is within one day
    of that expectation. The first entry outside the tolerance, or with
    an unparseable date, ends the streak.
    """
    today = _local_now(as_of).date()
    streak = 0
    for i, log in enumerate(sort_history(history)):
        day = local_date(log.date)
        if day is None:
            break
        expected = today - timedelta(days=i)
        if abs((day - expected).days) > STREAK_TOLERANCE_DAYS:
            break
        streak += 1
    return streak


def completion_rate(log: SessionLog) -> int:
    """Percentage of completed sets in *log*, 0 when it has no sets."""
    total = sum(len(ex.sets) for ex in log.exercises)
    done = sum(ex.completed_sets for ex in log.exercises)
    return percent(done, total)


def percent(part: int, whole: int) -> int:
    """Whole-number percentage, rounded half up; 0 for an empty whole."""
    if whole <= 0:
        return 0
    return int(round_half_up(100 * part / whole))


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round like a stopwatch display: .5 always goes up."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def _local_now(as_of: Optional[datetime]) -> datetime:
    return (as_of or datetime.now()).astimezone()
