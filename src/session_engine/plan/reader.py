"""Pure functions over plan rows: set-count parsing, templates, session keys.

No I/O: callers hand in PlanEntry rows already loaded from the datastore.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Sequence

from session_engine.exceptions import MalformedPlanEntryError
from session_engine.models.enums import DEFAULT_SET_COUNT, SESSION_CODE_JOINER
from session_engine.models.plan_entry import PlanEntry, PlanFilter
from session_engine.models.session_log import (
    ExerciseLog,
    SessionKey,
    SessionLog,
    SetLog,
)

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"\d+")


def parse_set_count(target_sets: str | None) -> int:
    """Derive the number of sets from a plan's target-sets text.

    "4" → 4; a hyphenated progression uses its last step, so "3-4-5" → 5;
    anything else falls back to DEFAULT_SET_COUNT.
    """
    try:
        return _parse_set_spec(target_sets)
    except MalformedPlanEntryError as exc:
        logger.warning("%s, using %d sets", exc, DEFAULT_SET_COUNT)
        return DEFAULT_SET_COUNT


def _parse_set_spec(target_sets: str | None) -> int:
    text = (target_sets or "").strip()
    if _INTEGER.fullmatch(text):
        return int(text)
    if "-" in text:
        last = text.split("-")[-1].strip()
        if _INTEGER.fullmatch(last):
            return int(last)
    raise MalformedPlanEntryError(f"Unparseable target sets {target_sets!r}")


def build_exercise_templates(
    entries: Sequence[PlanEntry],
) -> tuple[ExerciseLog, ...]:
    """One empty ExerciseLog per plan entry, in plan-entry order."""
    templates: list[ExerciseLog] = []
    for entry in entries:
        set_count = parse_set_count(entry.target_sets)
        templates.append(
            ExerciseLog(
                exercise_name=entry.exercise_name,
                original_session=entry.session_code,
                notes="",
                sets=tuple(SetLog(set_number=i) for i in range(1, set_count + 1)),
            )
        )
    return tuple(templates)


def session_code_for(codes: Iterable[str]) -> str:
    """Join distinct session codes with '+' in first-seen order."""
    return SESSION_CODE_JOINER.join(dict.fromkeys(codes))


def session_key_for(entries: Sequence[PlanEntry]) -> SessionKey:
    """SessionKey of a recording merging *entries*.

    Year, month and week come from the first entry.
    """
    if not entries:
        return SessionKey()
    first = entries[0]
    return SessionKey(
        year=first.year,
        month_num=first.month_num,
        week=first.week,
        session_code=session_code_for(e.session_code for e in entries),
    )


def select_plan_entries(
    entries: Iterable[PlanEntry], plan_filter: PlanFilter
) -> tuple[PlanEntry, ...]:
    """Rows of the selected week and sessions, ordered for display."""
    selected = [
        e
        for e in entries
        if e.year == plan_filter.year
        and e.month_num == plan_filter.month_num
        and e.week == plan_filter.week
        and e.session_code in plan_filter.session_codes
    ]
    return tuple(sorted(selected, key=lambda e: e.order))


def plan_entries_from_log(log: SessionLog) -> tuple[PlanEntry, ...]:
    """Minimal plan rows rebuilt from a log whose plan rows are gone.

    Used when editing an old session: one entry per recorded exercise,
    with the recorded set count as the target.
    """
    key = log.session_key
    return tuple(
        PlanEntry(
            exercise_name=ex.exercise_name,
            session_code=ex.original_session or key.session_code,
            target_sets=str(len(ex.sets)),
            year=key.year,
            month_num=key.month_num,
            week=key.week,
            order=position,
        )
        for position, ex in enumerate(log.exercises, start=1)
    )
