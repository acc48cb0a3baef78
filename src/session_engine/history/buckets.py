"""Calendar bucketing of a session history (day, month, year, display period)."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Optional

import numpy as np
import pandas as pd

from session_engine.history.aggregates import round_half_up
from session_engine.history.dates import local_date, normalize_date
from session_engine.models.enums import Period
from session_engine.models.history_summary import PeriodGroup
from session_engine.models.session_log import SessionLog

_COLUMNS = ["year", "month", "day", "minutes", "rpe"]
_TOTAL_COLUMNS = ["sessions", "total_minutes", "average_rpe"]


def calendar_keys(history: Iterable[SessionLog]) -> set[str]:
    """``YYYY-MM-DD`` keys of every day with at least one known-date entry."""
    keys = set()
    for log in history:
        key = normalize_date(log.date).calendar_key
        if key is not None:
            keys.add(key)
    return keys


def monthly_totals(history: Iterable[SessionLog]) -> pd.DataFrame:
    """Sessions, minutes and mean session RPE per (year, month), newest first.

    ``month`` is 1-based in the index. Entries with unknown dates are left out.
    """
    return _totals(_history_frame(history), ["year", "month"])


def yearly_totals(history: Iterable[SessionLog]) -> pd.DataFrame:
    """Sessions, minutes and mean session RPE per year, newest first."""
    return _totals(_history_frame(history), ["year"])


def group_by_period(
    history: Iterable[SessionLog], as_of: Optional[datetime] = None
) -> list[PeriodGroup]:
    """Split *history* into today / this week / last week / older.

    Weeks start on Monday. Entries keep their input order inside a group,
    unknown dates go to OLDER, and empty groups are omitted.
    """
    today = (as_of or datetime.now()).astimezone().date()
    week_start = today - timedelta(days=today.weekday())
    last_week_start = week_start - timedelta(days=7)

    buckets: dict[Period, list[SessionLog]] = {p: [] for p in Period}
    for log in history:
        day = local_date(log.date)
        if day is None:
            buckets[Period.OLDER].append(log)
        elif day == today:
            buckets[Period.TODAY].append(log)
        elif day >= week_start:
            buckets[Period.THIS_WEEK].append(log)
        elif day >= last_week_start:
            buckets[Period.LAST_WEEK].append(log)
        else:
            buckets[Period.OLDER].append(log)

    return [
        PeriodGroup(period=period, sessions=tuple(logs))
        for period, logs in buckets.items()
        if logs
    ]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _history_frame(history: Iterable[SessionLog]) -> pd.DataFrame:
    rows = []
    for log in history:
        nd = normalize_date(log.date)
        if not nd.is_valid:
            continue
        rows.append(
            {
                "year": nd.year,
                "month": nd.month + 1,
                "day": nd.day,
                "minutes": log.duration_minutes or 0,
                "rpe": np.nan if log.session_rpe is None else float(log.session_rpe),
            }
        )
    return pd.DataFrame(rows, columns=_COLUMNS)


def _totals(frame: pd.DataFrame, by: list[str]) -> pd.DataFrame:
    if frame.empty:
        if len(by) == 1:
            index = pd.Index([], name=by[0])
        else:
            index = pd.MultiIndex.from_arrays([[] for _ in by], names=by)
        return pd.DataFrame(columns=_TOTAL_COLUMNS, index=index)

    totals = frame.groupby(by).agg(
        sessions=("minutes", "size"),
        total_minutes=("minutes", "sum"),
        average_rpe=("rpe", "mean"),
    )
    totals["average_rpe"] = totals["average_rpe"].map(
        lambda v: v if np.isnan(v) else round_half_up(v, 1)
    )
    return totals.sort_index(ascending=False)
