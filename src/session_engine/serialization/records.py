"""camelCase record codec for SessionLog objects.

The record shape is owned by the external datastore schema, which has
changed over time. Decoding therefore tolerates legacy key names
(``annee``/``moisNum``/``semaine``/``seance``, ``duration_minutes``) and
numeric reps/weight.

All functions are pure (no I/O).
"""

from __future__ import annotations

import json
from typing import Any

from session_engine.models.enums import SESSION_COMMENT_KEY
from session_engine.models.session_log import (
    ExerciseLog,
    SessionKey,
    SessionLog,
    SetLog,
)

# Legacy → current SessionKey field names.
_SESSION_KEY_ALIASES = {
    "year": ("year", "annee"),
    "month_num": ("monthNum", "moisNum", "month"),
    "week": ("week", "semaine"),
    "session_code": ("sessionCode", "seance", "name"),
}


def session_log_to_record(log: SessionLog) -> dict[str, Any]:
    """Convert a SessionLog to a JSON-compatible camelCase dict."""
    record: dict[str, Any] = {
        "id": log.id,
        "date": log.date,
        "sessionKey": {
            "year": log.session_key.year,
            "monthNum": log.session_key.month_num,
            "week": log.session_key.week,
            "sessionCode": log.session_key.session_code,
        },
        "exercises": [_exercise_to_record(ex) for ex in log.exercises],
        "durationMinutes": log.duration_minutes,
        "comments": dict(log.comments),
    }
    if log.session_rpe is not None:
        record["sessionRpe"] = log.session_rpe
    return record


def session_log_to_json_string(log: SessionLog, indent: int | None = None) -> str:
    """Convert a SessionLog to a JSON string."""
    return json.dumps(session_log_to_record(log), indent=indent)


def session_log_from_record(record: dict[str, Any]) -> SessionLog:
    """Build a SessionLog from a stored record.

    Raises KeyError/TypeError/ValueError when the record is not a
    session log at all (no ``id`` or ``date``).
    """
    return SessionLog(
        id=str(record["id"]),
        date=str(record["date"]),
        session_key=session_key_from_record(
            record.get("sessionKey") or record.get("session_key") or {}
        ),
        exercises=tuple(
            exercise_from_record(ex) for ex in record.get("exercises") or ()
        ),
        duration_minutes=_optional_int(
            _first(record, "durationMinutes", "duration_minutes")
        ),
        comments=_comments_from_record(record.get("comments")),
        session_rpe=_optional_int(_first(record, "sessionRpe", "session_rpe")),
    )


def session_key_from_record(data: dict[str, Any]) -> SessionKey:
    """Decode a SessionKey, accepting current and legacy field names."""
    values: dict[str, Any] = {}
    for field_name, aliases in _SESSION_KEY_ALIASES.items():
        values[field_name] = _first(data, *aliases)
    return SessionKey(
        year=_optional_int(values["year"]) or 0,
        month_num=_optional_int(values["month_num"]) or 0,
        week=_optional_int(values["week"]) or 0,
        session_code=_text(values["session_code"]),
    )


def exercise_from_record(data: dict[str, Any]) -> ExerciseLog:
    """Decode one ExerciseLog; set order is kept as stored."""
    return ExerciseLog(
        exercise_name=_text(data.get("exerciseName")),
        original_session=_text(data.get("originalSession")),
        notes=_text(data.get("notes")),
        sets=tuple(
            _set_from_record(s, position)
            for position, s in enumerate(data.get("sets") or (), start=1)
        ),
        rpe=_optional_int(data.get("rpe")),
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _exercise_to_record(exercise: ExerciseLog) -> dict[str, Any]:
    record: dict[str, Any] = {
        "exerciseName": exercise.exercise_name,
        "originalSession": exercise.original_session,
        "notes": exercise.notes,
        "sets": [
            {
                "setNumber": s.set_number,
                "reps": s.reps,
                "weight": s.weight,
                "completed": s.completed,
            }
            for s in exercise.sets
        ],
    }
    if exercise.rpe is not None:
        record["rpe"] = exercise.rpe
    return record


def _set_from_record(data: dict[str, Any], position: int) -> SetLog:
    return SetLog(
        set_number=_optional_int(data.get("setNumber")) or position,
        reps=_text(data.get("reps")),
        weight=_text(data.get("weight")),
        completed=bool(data.get("completed", False)),
    )


def _comments_from_record(data: Any) -> dict[str, str]:
    """Per-exercise comments; a legacy plain string becomes the session-wide entry."""
    if isinstance(data, dict):
        return {str(k): _text(v) for k, v in data.items()}
    if isinstance(data, str) and data:
        return {SESSION_COMMENT_KEY: data}
    return {}


def _first(data: dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _text(value: Any) -> str:
    """Opaque free text; numbers from older clients become their string form."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None
