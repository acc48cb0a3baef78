"""Pure functions mapping datastore rows to core models and back.

No I/O: takes raw dicts as returned by the ``training_plans`` and
``session_logs`` tables. Column names drifted over the life of the
schema, so readers accept the older spellings too.
"""

from __future__ import annotations

from typing import Any, Optional

from session_engine.models.plan_entry import PlanEntry
from session_engine.models.session_log import SessionLog
from session_engine.serialization.records import (
    session_log_from_record,
    session_log_to_record,
)


def map_plan_row(row: dict[str, Any]) -> PlanEntry:
    """Map a ``training_plans`` row (optionally joined with ``exercises``).

    Values from the joined exercise library take precedence over the
    plan row's own copies, as the library is what coaches keep current.
    """
    library = row.get("exercises") or {}
    if not isinstance(library, dict):
        library = {}

    return PlanEntry(
        exercise_name=_text(library.get("name") or _first(row, "exercise", "exercise_name")),
        session_code=_text(_first(row, "session", "session_code")),
        target_sets=_text(_first(row, "sets", "target_sets")),
        target_reps=_text(_first(row, "reps", "target_reps")),
        rest_seconds=_optional_int(_first(row, "rest", "rest_seconds")),
        tempo_rpe=_text(library.get("tempo") or _first(row, "tempo", "tempo_rpe")),
        coach_notes=_text(library.get("coach_instructions") or row.get("notes")),
        video_url=library.get("video_url") or row.get("video_url") or None,
        year=_optional_int(row.get("year")) or 0,
        month_num=_optional_int(_first(row, "month_num", "Month_num")) or 0,
        week=_optional_int(row.get("week")) or 0,
        order=_optional_int(_first(row, "order_index", "order")) or 0,
    )


def map_session_log_row(row: dict[str, Any]) -> SessionLog:
    """Map a ``session_logs`` row to a SessionLog."""
    return session_log_from_record(
        {
            "id": row["id"],
            "date": row.get("date"),
            "sessionKey": row.get("session_key") or {},
            "exercises": row.get("exercises") or [],
            "durationMinutes": row.get("duration_minutes"),
            "comments": row.get("comments"),
            "sessionRpe": row.get("session_rpe"),
        }
    )


def session_log_to_row(log: SessionLog, athlete_id: str) -> dict[str, Any]:
    """Build the ``session_logs`` upsert payload for *log*."""
    record = session_log_to_record(log)
    return {
        "id": log.id,
        "user_id": athlete_id,
        "date": log.date,
        "session_key": record["sessionKey"],
        "exercises": record["exercises"],
        "duration_minutes": log.duration_minutes,
        "session_rpe": log.session_rpe,
        "comments": record["comments"],
    }


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _first(row: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if row.get(key) is not None:
            return row[key]
    return None


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None
