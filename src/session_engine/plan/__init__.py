"""Plan Entry Reader: turns selected plan rows into exercise templates."""

from session_engine.plan.reader import (
    build_exercise_templates,
    parse_set_count,
    plan_entries_from_log,
    select_plan_entries,
    session_code_for,
    session_key_for,
)

__all__ = [
    "build_exercise_templates",
    "parse_set_count",
    "plan_entries_from_log",
    "select_plan_entries",
    "session_code_for",
    "session_key_for",
]
