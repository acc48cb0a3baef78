"""Tests for session_engine.draft.finalizer."""

from __future__ import annotations

import time
import uuid
from datetime import datetime, timedelta

import pytest

from session_engine.draft.finalizer import (
    elapsed_minutes,
    finalize,
    retroactive_timestamp,
    validate_rpe,
)
from session_engine.exceptions import (
    DraftStateError,
    IncompleteDateError,
    InvalidRetroDateError,
    InvalidRpeError,
)
from session_engine.history.dates import format_timestamp, normalize_date
from session_engine.models.draft import Draft, RetroDate
from session_engine.models.enums import UNSAVED_LOG_ID
from session_engine.models.session_log import ExerciseLog, SessionKey, SetLog

STARTED = datetime(2024, 6, 15, 10, 0).astimezone()


def _draft(log_id: str = UNSAVED_LOG_ID, original_date: str | None = None) -> Draft:
    return Draft(
        log_id=log_id,
        started_at=STARTED,
        session_key=SessionKey(2024, 6, 2, "A+B"),
        exercises=(ExerciseLog("Squat", "A", sets=(SetLog(1, "5", "100", True),)),),
        comments={"Squat": "felt heavy"},
        original_date=original_date,
    )


class TestNewSession:
    def test_fresh_id_and_now_date(self) -> None:
        now = STARTED + timedelta(minutes=50)
        log = finalize(_draft(), is_edit_mode=False, is_retroactive=False, now=now)
        assert log.id != UNSAVED_LOG_ID
        uuid.UUID(log.id)
        assert log.date == format_timestamp(now)
        assert log.date.endswith("Z")
        assert log.duration_minutes == 50

    def test_ids_are_unique(self) -> None:
        a = finalize(_draft(), False, False, now=STARTED)
        b = finalize(_draft(), False, False, now=STARTED)
        assert a.id != b.id

    def test_carries_draft_content(self) -> None:
        draft = _draft()
        log = finalize(draft, False, False, now=STARTED, session_rpe=8)
        assert log.session_key == draft.session_key
        assert log.exercises == draft.exercises
        assert log.comments == {"Squat": "felt heavy"}
        assert log.session_rpe == 8


class TestEditMode:
    def test_preserves_id_and_original_date(self) -> None:
        original = "2024-05-01T08:00:00.000Z"
        log = finalize(
            _draft("log-1", original),
            is_edit_mode=True,
            is_retroactive=False,
            now=STARTED + timedelta(minutes=5),
        )
        assert log.id == "log-1"
        assert log.date == original
        assert log.duration_minutes == 5

    def test_retroactive_date_overrides_original(self) -> None:
        log = finalize(
            _draft("log-1", "2024-05-01T08:00:00.000Z"),
            is_edit_mode=True,
            is_retroactive=True,
            retro_date=RetroDate(day=2, month=5, year=2024),
            now=STARTED,
        )
        assert log.id == "log-1"
        assert normalize_date(log.date).calendar_key == "2024-05-02"

    def test_requires_persisted_draft(self) -> None:
        with pytest.raises(DraftStateError):
            finalize(_draft(), is_edit_mode=True, is_retroactive=False, now=STARTED)


class TestRetroactive:
    def test_noon_on_chosen_day_with_fixed_duration(self) -> None:
        log = finalize(
            _draft(),
            is_edit_mode=False,
            is_retroactive=True,
            retro_date=RetroDate(day=3, month=2, year=2024),
            now=STARTED + timedelta(hours=3),
        )
        assert log.duration_minutes == 60
        assert log.date == format_timestamp(datetime(2024, 2, 3, 12, 0).astimezone())
        nd = normalize_date(log.date)
        assert (nd.year, nd.month, nd.day) == (2024, 1, 3)

    @pytest.mark.parametrize(
        "retro", [None, RetroDate(), RetroDate(day=3, month=2), RetroDate(day=3, year=2024)]
    )
    def test_incomplete_date_rejected(self, retro) -> None:
        with pytest.raises(IncompleteDateError):
            finalize(_draft(), False, True, retro_date=retro, now=STARTED)

    def test_impossible_date_rejected(self) -> None:
        with pytest.raises(InvalidRetroDateError) as excinfo:
            retroactive_timestamp(RetroDate(day=30, month=2, year=2024))
        assert not isinstance(excinfo.value, IncompleteDateError)

    def test_leap_day_accepted(self) -> None:
        ts = retroactive_timestamp(RetroDate(day=29, month=2, year=2024))
        assert normalize_date(ts).calendar_key == "2024-02-29"


class TestElapsedMinutes:
    @pytest.mark.parametrize(
        "seconds, expected",
        [(0, 0), (29, 0), (30, 1), (2549, 42), (2550, 43), (3600, 60)],
    )
    def test_rounds_half_up(self, seconds, expected) -> None:
        assert elapsed_minutes(STARTED, STARTED + timedelta(seconds=seconds)) == expected

    def test_clock_going_backwards_is_zero(self) -> None:
        assert elapsed_minutes(STARTED, STARTED - timedelta(minutes=3)) == 0


class TestValidateRpe:
    @pytest.mark.parametrize("rpe", [None, 1, 7, 10])
    def test_accepts(self, rpe) -> None:
        validate_rpe(rpe)

    @pytest.mark.parametrize("rpe", [0, 11, -1, True, 7.5, "8"])
    def test_rejects(self, rpe) -> None:
        with pytest.raises(InvalidRpeError):
            validate_rpe(rpe)

    def test_invalid_session_rpe_blocks_finalize(self) -> None:
        with pytest.raises(InvalidRpeError):
            finalize(_draft(), False, False, now=STARTED, session_rpe=12)


@pytest.fixture
def local_zone(monkeypatch):
    """Switch the process timezone for one test, restoring it afterwards."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is unavailable on this platform")

    def switch(name: str) -> None:
        monkeypatch.setenv("TZ", name)
        time.tzset()

    yield switch
    monkeypatch.undo()
    time.tzset()


class TestRetroactiveAcrossTimezones:
    @pytest.mark.parametrize(
        "zone", ["Pacific/Kiritimati", "Etc/GMT+12", "America/St_Johns", "UTC"]
    )
    def test_chosen_day_is_kept(self, local_zone, zone) -> None:
        local_zone(zone)
        draft = Draft(
            log_id=UNSAVED_LOG_ID,
            started_at=datetime(2023, 3, 20, 9, 0).astimezone(),
            session_key=SessionKey(session_code="A"),
            exercises=(),
        )
        log = finalize(
            draft,
            is_edit_mode=False,
            is_retroactive=True,
            retro_date=RetroDate(day=15, month=3, year=2023),
            now=datetime(2023, 3, 20, 10, 0),
        )
        assert normalize_date(log.date).calendar_key == "2023-03-15"
        assert log.duration_minutes == 60
