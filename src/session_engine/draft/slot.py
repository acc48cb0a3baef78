"""Durable single-slot storage for the in-flight draft.

One JSON file holds the latest autosaved draft as a SessionLog record,
plus two bookkeeping keys the record format tolerates: the draft start
time and, for edits, the original log date. Every write overwrites the
slot; there is no history of intermediate drafts. Concurrent writers
(two processes on one slot) are unsupported: last writer wins.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

from session_engine.exceptions import DraftSlotError
from session_engine.history.dates import format_timestamp, parse_timestamp
from session_engine.models.draft import Draft
from session_engine.models.session_log import SessionLog
from session_engine.serialization.records import (
    session_log_from_record,
    session_log_to_record,
)

logger = logging.getLogger(__name__)

_DEFAULT_SLOT_PATH = Path("~/.session_recorder/active_session.json").expanduser()

_STARTED_AT_KEY = "draftStartedAt"
_ORIGINAL_DATE_KEY = "draftOriginalDate"


class DraftSlot:
    """File-backed autosave slot for exactly one draft."""

    def __init__(self, path: Path | str = _DEFAULT_SLOT_PATH) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        """True if a draft is waiting to be recovered."""
        return self._path.exists()

    def write(self, draft: Draft, saved_at: datetime) -> None:
        """Overwrite the slot with *draft* as of *saved_at*."""
        record = session_log_to_record(draft_snapshot(draft, saved_at))
        record[_STARTED_AT_KEY] = format_timestamp(draft.started_at)
        record[_ORIGINAL_DATE_KEY] = draft.original_date

        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_text(json.dumps(record))
        os.replace(tmp, self._path)
        logger.debug("Autosaved draft %s to %s", draft.log_id, self._path)

    def read(self) -> Optional[Draft]:
        """Return the saved draft, or None when the slot is empty.

        Raises ``DraftSlotError`` if the slot holds something that is not
        a draft.
        """
        if not self._path.exists():
            return None
        try:
            record = json.loads(self._path.read_text())
            log = session_log_from_record(record)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as exc:
            raise DraftSlotError(f"Unreadable draft slot {self._path}: {exc}") from exc

        started_at = parse_timestamp(record.get(_STARTED_AT_KEY))
        if started_at is None:
            started_at = parse_timestamp(log.date) or datetime.now().astimezone()
        return Draft(
            log_id=log.id,
            started_at=started_at,
            session_key=log.session_key,
            exercises=log.exercises,
            comments=dict(log.comments),
            original_date=record.get(_ORIGINAL_DATE_KEY),
        )

    def clear(self) -> None:
        """Remove any saved draft."""
        try:
            self._path.unlink()
            logger.info("Cleared draft slot %s", self._path)
        except FileNotFoundError:
            pass


def draft_snapshot(draft: Draft, saved_at: datetime) -> SessionLog:
    """The in-progress SessionLog as it would look at *saved_at*."""
    return SessionLog(
        id=draft.log_id,
        date=format_timestamp(saved_at),
        session_key=draft.session_key,
        exercises=draft.exercises,
        comments=dict(draft.comments),
    )
