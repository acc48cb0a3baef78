"""SessionRecorder: owns the single in-flight draft and its lifecycle.

States: UNINITIALIZED → DRAFTING → FINALIZING → SAVED | CANCELLED.
Every mutation replaces the Draft value and autosaves it to the
DraftSlot, the only crash-recovery mechanism.
"""

from __future__ import annotations

import dataclasses
import logging
from datetime import datetime
from typing import Any, Callable, Optional, Sequence

from session_engine.draft import finalizer
from session_engine.draft.slot import DraftSlot, draft_snapshot
from session_engine.exceptions import (
    DraftSlotError,
    DraftStateError,
    FinalizeInProgressError,
)
from session_engine.history.aggregates import percent
from session_engine.models.draft import Draft, RetroDate
from session_engine.models.enums import UNSAVED_LOG_ID, DraftState, SetField
from session_engine.models.plan_entry import PlanEntry
from session_engine.models.session_log import ExerciseLog, SessionLog
from session_engine.plan.reader import build_exercise_templates, session_key_for

logger = logging.getLogger(__name__)

# States from which a new draft may be started
_STARTABLE = frozenset({
    DraftState.UNINITIALIZED,
    DraftState.SAVED,
    DraftState.CANCELLED,
})


def _local_now() -> datetime:
    return datetime.now().astimezone()


class SessionRecorder:
    """Drives one recording session at a time.

    Usage:
        recorder = SessionRecorder(DraftSlot(path))
        recorder.start(plan_entries)
        recorder.update_set(0, 0, SetField.REPS, "8")
        recorder.update_set(0, 0, SetField.WEIGHT, "60")
        saved = recorder.finalize(store)

    *store* is any object with ``persist_log(log) -> SessionLog``, e.g.
    :class:`log_store.LogStoreClient`.
    """

    def __init__(
        self,
        slot: DraftSlot | None = None,
        clock: Callable[[], datetime] = _local_now,
    ) -> None:
        self._slot = slot
        self._clock = clock
        self._state = DraftState.UNINITIALIZED
        self._draft: Draft | None = None

    @property
    def state(self) -> DraftState:
        return self._state

    @property
    def draft(self) -> Draft | None:
        return self._draft

    @property
    def is_edit_mode(self) -> bool:
        return self._draft is not None and self._draft.is_edit_mode

    # ------------------------------------------------------------------
    # Entering DRAFTING
    # ------------------------------------------------------------------

    def start(self, plan_entries: Sequence[PlanEntry]) -> Draft:
        """Begin a new session from the selected plan entries."""
        self._require_startable()
        entries = tuple(plan_entries)
        draft = Draft(
            log_id=UNSAVED_LOG_ID,
            started_at=self._clock(),
            session_key=session_key_for(entries),
            exercises=build_exercise_templates(entries),
            plan_entries=entries,
        )
        logger.info(
            "Started session %s with %d exercises",
            draft.session_key.session_code,
            len(draft.exercises),
        )
        return self._enter_drafting(draft)

    def start_from_log(
        self, log: SessionLog, plan_entries: Sequence[PlanEntry] = ()
    ) -> Draft:
        """Begin editing *log*; its exercises are taken verbatim.

        A persisted id is kept and puts the recorder in edit mode, in
        which finalize preserves the log's original date.
        """
        self._require_startable()
        editing = log.is_persisted
        draft = Draft(
            log_id=log.id if editing else UNSAVED_LOG_ID,
            started_at=self._clock(),
            session_key=log.session_key,
            exercises=log.exercises,
            plan_entries=tuple(plan_entries),
            comments=dict(log.comments),
            original_date=log.date if editing else None,
        )
        logger.info("Editing session %s (edit mode: %s)", log.id, editing)
        return self._enter_drafting(draft)

    def recover(self) -> Draft | None:
        """Resume the draft left in the durable slot, if any.

        A slot that cannot be decoded is cleared and treated as empty.
        """
        self._require_startable()
        if self._slot is None:
            return None
        try:
            draft = self._slot.read()
        except DraftSlotError as exc:
            logger.warning("Discarding unreadable draft: %s", exc)
            self._slot.clear()
            return None
        if draft is None:
            return None
        logger.info("Recovered draft %s from %s", draft.log_id, self._slot.path)
        return self._enter_drafting(draft)

    # ------------------------------------------------------------------
    # Mutations (each one autosaves)
    # ------------------------------------------------------------------

    def update_set(
        self,
        exercise_index: int,
        set_index: int,
        field: SetField | str,
        value: str,
    ) -> Draft:
        """Write reps or weight of one set.

        Once both reps and weight are non-empty the set is marked
        completed, and it stays completed even if a field is cleared later.
        """
        draft = self._require_drafting()
        field = SetField(field)
        value = "" if value is None else str(value)
        exercise = self._exercise_at(draft, exercise_index)
        if not 0 <= set_index < len(exercise.sets):
            raise IndexError(
                f"Set index {set_index} out of range for {exercise.exercise_name!r}"
            )

        current = exercise.sets[set_index]
        updated = dataclasses.replace(current, **{field.value: value})
        if updated.reps and updated.weight:
            updated = dataclasses.replace(updated, completed=True)

        sets = list(exercise.sets)
        sets[set_index] = updated
        return self._replace_exercise(
            draft, exercise_index, dataclasses.replace(exercise, sets=tuple(sets))
        )

    def set_exercise_notes(self, exercise_index: int, notes: str) -> Draft:
        draft = self._require_drafting()
        exercise = self._exercise_at(draft, exercise_index)
        return self._replace_exercise(
            draft, exercise_index, dataclasses.replace(exercise, notes=notes)
        )

    def set_exercise_rpe(self, exercise_index: int, rpe: Optional[int]) -> Draft:
        """Record the athlete's RPE (1-10) for one exercise, or clear it."""
        draft = self._require_drafting()
        finalizer.validate_rpe(rpe)
        exercise = self._exercise_at(draft, exercise_index)
        return self._replace_exercise(
            draft, exercise_index, dataclasses.replace(exercise, rpe=rpe)
        )

    def set_comment(self, exercise_name: str, comment: str) -> Draft:
        """Attach a free-text comment to an exercise; blank text removes it."""
        draft = self._require_drafting()
        comments = dict(draft.comments)
        if comment.strip():
            comments[exercise_name] = comment
        else:
            comments.pop(exercise_name, None)
        return self._commit(dataclasses.replace(draft, comments=comments))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def progress(self) -> int:
        """Percentage of completed sets in the current draft."""
        draft = self._require_drafting()
        return percent(draft.completed_sets, draft.total_sets)

    def snapshot(self) -> SessionLog:
        """The in-progress SessionLog, as the autosave slot would hold it."""
        return draft_snapshot(self._require_drafting(), self._clock())

    # ------------------------------------------------------------------
    # Leaving DRAFTING
    # ------------------------------------------------------------------

    def finalize(
        self,
        store: Any,
        is_retroactive: bool = False,
        retro_date: Optional[RetroDate] = None,
        session_rpe: Optional[int] = None,
    ) -> SessionLog:
        """Finalize the draft and hand it to *store* for persistence.

        Validation errors leave the recorder untouched. If
        ``store.persist_log`` raises, the recorder returns to DRAFTING
        with the draft and its slot intact, and the error propagates.
        """
        if self._state == DraftState.FINALIZING:
            raise FinalizeInProgressError("A finalize call is already in flight")
        draft = self._require_drafting()

        log = finalizer.finalize(
            draft,
            is_edit_mode=draft.is_edit_mode,
            is_retroactive=is_retroactive,
            retro_date=retro_date,
            now=self._clock(),
            session_rpe=session_rpe,
        )

        self._state = DraftState.FINALIZING
        try:
            saved = store.persist_log(log)
        except Exception as exc:
            self._state = DraftState.DRAFTING
            logger.warning("Persisting session %s failed, draft kept: %s", log.id, exc)
            raise

        self._draft = None
        self._state = DraftState.SAVED
        logger.info("Saved session %s", log.id)
        if self._slot is not None:
            try:
                self._slot.clear()
            except OSError as exc:
                logger.warning("Could not clear draft slot %s: %s", self._slot.path, exc)
        return saved if saved is not None else log

    def cancel(self, clear_slot: bool = True) -> None:
        """Discard the draft. Any confirmation step belongs to the caller."""
        if self._state == DraftState.FINALIZING:
            raise FinalizeInProgressError("Cannot cancel while finalizing")
        self._require_drafting()
        if clear_slot and self._slot is not None:
            self._slot.clear()
        self._draft = None
        self._state = DraftState.CANCELLED
        logger.info("Cancelled draft")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_startable(self) -> None:
        if self._state not in _STARTABLE:
            raise DraftStateError(
                f"A draft is already in progress (state {self._state.name})"
            )

    def _require_drafting(self) -> Draft:
        if self._state != DraftState.DRAFTING or self._draft is None:
            raise DraftStateError(f"No draft in progress (state {self._state.name})")
        return self._draft

    def _enter_drafting(self, draft: Draft) -> Draft:
        self._draft = draft
        self._state = DraftState.DRAFTING
        return draft

    @staticmethod
    def _exercise_at(draft: Draft, exercise_index: int) -> ExerciseLog:
        if not 0 <= exercise_index < len(draft.exercises):
            raise IndexError(f"Exercise index {exercise_index} out of range")
        return draft.exercises[exercise_index]

    def _replace_exercise(
        self, draft: Draft, exercise_index: int, exercise: ExerciseLog
    ) -> Draft:
        exercises = list(draft.exercises)
        exercises[exercise_index] = exercise
        return self._commit(dataclasses.replace(draft, exercises=tuple(exercises)))

    def _commit(self, draft: Draft) -> Draft:
        self._draft = draft
        if self._slot is not None:
            self._slot.write(draft, self._clock())
        return draft
