"""History Reconciler: pure queries over an athlete's session logs."""

from session_engine.history.aggregates import (
    completion_rate,
    monthly_summary,
    training_streak,
    weekly_count,
)
from session_engine.history.buckets import (
    calendar_keys,
    group_by_period,
    monthly_totals,
    yearly_totals,
)
from session_engine.history.dates import (
    needs_year_separator,
    normalize_date,
    parse_timestamp,
    sort_history,
)
from session_engine.history.queries import (
    filter_by_month,
    has_entry_on,
    last_occurrence,
    search_history,
)

__all__ = [
    "calendar_keys",
    "completion_rate",
    "filter_by_month",
    "group_by_period",
    "has_entry_on",
    "last_occurrence",
    "monthly_summary",
    "monthly_totals",
    "needs_year_separator",
    "normalize_date",
    "parse_timestamp",
    "search_history",
    "sort_history",
    "training_streak",
    "weekly_count",
]
