"""Tests for recorder_cli.history_report."""

from __future__ import annotations

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from log_store.exceptions import PersistenceError
from recorder_cli import history_report
from session_engine.draft.slot import DraftSlot
from session_engine.models.draft import Draft
from session_engine.models.session_log import ExerciseLog, SessionKey, SetLog


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setattr(history_report, "SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setattr(history_report, "SUPABASE_KEY", "anon-key")
    monkeypatch.setattr(history_report, "ATHLETE_ID", "athlete-1")


class TestFormatSummary:
    def test_counts_and_totals(self, log_factory, as_of) -> None:
        history = [
            log_factory("2024-06-15T08:00:00", duration_minutes=40, session_rpe=8),
            log_factory("2024-06-14T08:00:00", duration_minutes=50, session_rpe=7),
        ]
        text = history_report.format_summary(history, as_of)
        assert "Sessions this week:  2" in text
        assert "Sessions this month: 2 (90 min, 2 h)" in text
        assert "Training streak:     2 day(s)" in text
        assert "Average RPE (month): 7.5" in text

    def test_empty_history(self, as_of) -> None:
        text = history_report.format_summary([], as_of)
        assert "Sessions this week:  0" in text
        assert "Average RPE" not in text


class TestFormatDraft:
    def test_empty_slot(self, slot) -> None:
        assert history_report.format_draft(slot).startswith("No draft in")

    def test_describes_draft(self, slot) -> None:
        draft = Draft(
            log_id="temp",
            started_at=datetime(2024, 6, 15, 10, 0).astimezone(),
            session_key=SessionKey(session_code="A+B"),
            exercises=(ExerciseLog("Squat", sets=(SetLog(1, "5", "100", True), SetLog(2))),),
        )
        slot.write(draft, draft.started_at)
        text = history_report.format_draft(slot)
        assert "A+B" in text
        assert "new session" in text
        assert "1/2 sets completed" in text


class TestMain:
    def test_requires_one_action(self) -> None:
        with pytest.raises(SystemExit):
            history_report.main([])

    def test_actions_are_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            history_report.main(["--summary", "--draft"])

    def test_summary_without_config(self, monkeypatch) -> None:
        monkeypatch.setattr(history_report, "SUPABASE_URL", "")
        assert history_report.main(["--summary"]) == 2

    def test_summary(self, configured, monkeypatch, log_factory, capsys) -> None:
        store = MagicMock()
        store.load_history.return_value = [log_factory("2024-06-14T08:00:00")]
        factory = MagicMock(return_value=store)
        monkeypatch.setattr(history_report, "LogStoreClient", factory)

        assert history_report.main(["--summary"]) == 0
        assert factory.call_args[1]["athlete_id"] == "athlete-1"
        assert "Sessions this month" in capsys.readouterr().out

    def test_summary_store_failure(self, configured, monkeypatch) -> None:
        store = MagicMock()
        store.load_history.side_effect = PersistenceError("offline")
        monkeypatch.setattr(history_report, "LogStoreClient", MagicMock(return_value=store))
        assert history_report.main(["--summary"]) == 1

    def test_draft_and_clear(self, monkeypatch, tmp_path, capsys) -> None:
        path = tmp_path / "draft.json"
        monkeypatch.setattr(history_report, "DRAFT_SLOT_PATH", path)
        path.write_text("garbage")

        assert history_report.main(["--draft"]) == 1
        assert history_report.main(["--clear-draft"]) == 0
        assert not DraftSlot(path).exists()
        assert history_report.main(["--draft"]) == 0
        assert "No draft in" in capsys.readouterr().out
