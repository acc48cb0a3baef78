"""Date normalization and ordering for heterogeneous history records.

Stored dates are canonically ISO-8601, but older records used a
day-first slash format with a trailing annotation
("14/02/2023 - Leg Day"), and some are simply unparseable. Unparseable
dates are never dropped and never raise: normalization returns the
UNKNOWN_DATE sentinel and ordering falls back to string comparison.
"""

from __future__ import annotations

import functools
from datetime import date, datetime, timezone
from typing import Iterable, Optional

from session_engine.exceptions import UnparseableDateError
from session_engine.models.enums import (
    LEGACY_ANNOTATION_SEPARATOR,
    LEGACY_DATE_FORMATS,
    UNKNOWN_YEAR,
)
from session_engine.models.normalized_date import UNKNOWN_DATE, NormalizedDate
from session_engine.models.session_log import SessionLog


def parse_timestamp(date_str: object) -> Optional[datetime]:
    """Timezone-aware datetime for a stored date, or None when unparseable.

    The result is in local time. Naive values (legacy dates, ISO strings
    without offset) are taken as local time already, and instants that
    cannot be represented locally count as unparseable.
    """
    try:
        return _parse(date_str)
    except UnparseableDateError:
        return None


def normalize_date(date_str: object) -> NormalizedDate:
    """Local calendar date of a stored date string.

    ISO-8601 is tried first. Failing that, a string containing '/' is cut
    at the first " - ", its slashes become hyphens and it is parsed
    day-first. Anything else yields UNKNOWN_DATE.
    """
    ts = parse_timestamp(date_str)
    if ts is None:
        return UNKNOWN_DATE
    return NormalizedDate(is_valid=True, year=ts.year, month=ts.month - 1, day=ts.day)


def local_date(date_str: object) -> Optional[date]:
    """Local calendar day of a stored date, or None when unparseable."""
    ts = parse_timestamp(date_str)
    return ts.date() if ts is not None else None


def sort_history(history: Iterable[SessionLog]) -> list[SessionLog]:
    """Return *history* most recent first.

    Two parseable dates compare by timestamp; if either side does not
    parse, the raw date strings are compared in descending order instead.
    The sort is stable, so equal timestamps keep their input order.
    """
    decorated = [(parse_timestamp(log.date), log) for log in history]
    decorated.sort(key=functools.cmp_to_key(_compare_descending))
    return [log for _, log in decorated]


def needs_year_separator(previous: SessionLog, current: SessionLog) -> bool:
    """True when two adjacent sorted entries belong to different known years."""
    prev_year = normalize_date(previous.date).year
    curr_year = normalize_date(current.date).year
    if prev_year == UNKNOWN_YEAR or curr_year == UNKNOWN_YEAR:
        return False
    return prev_year != curr_year


def format_timestamp(value: datetime) -> str:
    """Canonical stored form: UTC ISO-8601 with milliseconds and a 'Z' suffix."""
    utc = _as_aware(value).astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _parse(date_str: object) -> datetime:
    if not isinstance(date_str, str) or not date_str.strip():
        raise UnparseableDateError(f"Not a date: {date_str!r}")
    text = date_str.strip()
    try:
        return datetime.fromisoformat(text).astimezone()
    except (ValueError, OverflowError, OSError):
        pass
    if "/" in text:
        cleaned = text.split(LEGACY_ANNOTATION_SEPARATOR)[0].replace("/", "-").strip()
        for fmt in LEGACY_DATE_FORMATS:
            try:
                return datetime.strptime(cleaned, fmt).astimezone()
            except (ValueError, OverflowError, OSError):
                continue
    raise UnparseableDateError(f"Unrecognized date format: {date_str!r}")


def _as_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.astimezone()
    return value


def _compare_descending(
    a: tuple[Optional[datetime], SessionLog],
    b: tuple[Optional[datetime], SessionLog],
) -> int:
    ts_a, log_a = a
    ts_b, log_b = b
    if ts_a is not None and ts_b is not None:
        return (ts_b > ts_a) - (ts_b < ts_a)
    raw_a, raw_b = str(log_a.date), str(log_b.date)
    return (raw_b > raw_a) - (raw_b < raw_a)