"""Finalizer: converts a draft into an immutable SessionLog.

Pure: no storage access. Identity, date and duration are resolved here;
persisting the result and clearing the draft slot is the recorder's job.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Optional

from session_engine.exceptions import (
    DraftStateError,
    IncompleteDateError,
    InvalidRetroDateError,
    InvalidRpeError,
)
from session_engine.history.aggregates import round_half_up
from session_engine.history.dates import format_timestamp
from session_engine.models.draft import Draft, RetroDate
from session_engine.models.enums import (
    RETROACTIVE_ANCHOR_HOUR,
    RETROACTIVE_DURATION_MIN,
    RPE_MAX,
    RPE_MIN,
)
from session_engine.models.session_log import SessionLog

logger = logging.getLogger(__name__)


def finalize(
    draft: Draft,
    is_edit_mode: bool,
    is_retroactive: bool,
    retro_date: Optional[RetroDate] = None,
    now: Optional[datetime] = None,
    session_rpe: Optional[int] = None,
) -> SessionLog:
    """Build the SessionLog for *draft*.

    Date priority: the chosen retroactive day at local noon, else the
    edited log's original date, else *now*. Retroactive sessions get a
    fixed 60-minute duration; others get the elapsed minutes since the
    draft started, rounded half up.

    Raises:
        IncompleteDateError: retroactive mode without day, month and year.
        InvalidRetroDateError: the chosen day does not exist.
        InvalidRpeError: *session_rpe* outside 1-10.
        DraftStateError: edit mode requested for a never-persisted draft.
    """
    validate_rpe(session_rpe)
    now = (now or datetime.now()).astimezone()

    if is_retroactive:
        date_str = retroactive_timestamp(retro_date)
        duration = RETROACTIVE_DURATION_MIN
    else:
        if is_edit_mode and draft.original_date:
            date_str = draft.original_date
        else:
            date_str = format_timestamp(now)
        duration = elapsed_minutes(draft.started_at, now)

    if is_edit_mode:
        if not draft.is_edit_mode:
            raise DraftStateError("Edit mode requires a draft of a persisted log")
        log_id = draft.log_id
    else:
        log_id = str(uuid.uuid4())

    logger.info(
        "Finalized session %s (%s) dated %s, %d min",
        log_id,
        draft.session_key.session_code,
        date_str,
        duration,
    )
    return SessionLog(
        id=log_id,
        date=date_str,
        session_key=draft.session_key,
        exercises=draft.exercises,
        duration_minutes=duration,
        comments=dict(draft.comments),
        session_rpe=session_rpe,
    )


def retroactive_timestamp(retro_date: Optional[RetroDate]) -> str:
    """ISO-8601 timestamp at local noon on the chosen day."""
    if retro_date is None or not retro_date.is_complete:
        raise IncompleteDateError(
            "Day, month and year are required to record a past session"
        )
    try:
        noon = datetime(
            int(retro_date.year),
            int(retro_date.month),
            int(retro_date.day),
            RETROACTIVE_ANCHOR_HOUR,
        )
    except ValueError as exc:
        raise InvalidRetroDateError(f"Invalid session date: {exc}") from exc
    return format_timestamp(noon.astimezone())


def elapsed_minutes(started_at: datetime, now: datetime) -> int:
    """Whole minutes between two instants, rounded half up, never negative."""
    seconds = (now.astimezone() - started_at.astimezone()).total_seconds()
    return max(0, int(round_half_up(seconds / 60)))


def validate_rpe(rpe: Optional[int]) -> None:
    """Accept None or an integer RPE on the 1-10 scale."""
    if rpe is None:
        return
    if isinstance(rpe, bool) or not isinstance(rpe, int) or not RPE_MIN <= rpe <= RPE_MAX:
        raise InvalidRpeError(f"RPE must be between {RPE_MIN} and {RPE_MAX}, got {rpe!r}")
