"""Tests for session_engine.history.queries."""

from __future__ import annotations

from session_engine.history.queries import (
    filter_by_month,
    has_entry_on,
    last_occurrence,
    search_history,
)


class TestLastOccurrence:
    def test_most_recent_across_session_codes(self, log_factory) -> None:
        history = [
            log_factory("2024-06-10T18:00:00", session_code="A", weight="100"),
            log_factory("2024-06-14T18:00:00", session_code="C", weight="105"),
            log_factory("2024-06-12T18:00:00", session_code="B", weight="102.5"),
        ]
        occurrence = last_occurrence(history, "Back Squat")
        assert occurrence.date == "2024-06-14T18:00:00"
        assert occurrence.sets[0].weight == "105"

    def test_skips_logs_without_the_exercise(self, log_factory) -> None:
        history = [
            log_factory("2024-06-14T18:00:00", exercises=("Deadlift",)),
            log_factory("2024-06-01T18:00:00", exercises=("Back Squat", "Row"), reps="8"),
        ]
        occurrence = last_occurrence(history, "Back Squat")
        assert occurrence.date == "2024-06-01T18:00:00"
        assert occurrence.sets[0].reps == "8"

    def test_name_match_is_exact(self, log_factory) -> None:
        history = [log_factory("2024-06-14T18:00:00", exercises=("Back Squat",))]
        assert last_occurrence(history, "back squat") is None

    def test_none_when_never_recorded(self, log_factory) -> None:
        assert last_occurrence([log_factory("2024-06-14T18:00:00")], "Deadlift") is None
        assert last_occurrence([], "Deadlift") is None


class TestHasEntryOn:
    def test_matches_local_day(self, log_factory) -> None:
        history = [log_factory("2024-06-14T18:00:00")]
        assert has_entry_on(history, 2024, 5, 14)
        assert not has_entry_on(history, 2024, 5, 13)
        assert not has_entry_on(history, 2024, 6, 14)

    def test_single_digit_month_and_day(self, log_factory) -> None:
        assert has_entry_on([log_factory("2024-01-05T10:00:00")], 2024, 0, 5)

    def test_legacy_dates(self, log_factory) -> None:
        assert has_entry_on([log_factory("14/06/2024 - Legs")], 2024, 5, 14)

    def test_unknown_dates_never_match(self, log_factory) -> None:
        assert not has_entry_on([log_factory("garbage")], 0, 0, 0)


class TestSearchHistory:
    def test_by_exercise_name_case_insensitive(self, log_factory) -> None:
        squat = log_factory("2024-06-14T18:00:00", exercises=("Back Squat",))
        bench = log_factory("2024-06-13T18:00:00", exercises=("Bench Press",))
        assert search_history([squat, bench], "SQUAT") == [squat]

    def test_by_session_code(self, log_factory) -> None:
        a = log_factory("2024-06-14T18:00:00", session_code="Upper A")
        b = log_factory("2024-06-13T18:00:00", session_code="Lower B")
        assert search_history([a, b], "lower") == [b]

    def test_blank_term_returns_all(self, log_factory) -> None:
        history = [log_factory("2024-06-14T18:00:00"), log_factory("2024-06-13T18:00:00")]
        assert search_history(history, "  ") == history


class TestFilterByMonth:
    def test_keeps_month_entries_in_order(self, log_factory) -> None:
        history = [
            log_factory("2024-06-14T18:00:00"),
            log_factory("2024-05-31T18:00:00"),
            log_factory("02/06/2024"),
            log_factory("garbage"),
        ]
        assert [log.date for log in filter_by_month(history, 2024, 5)] == [
            "2024-06-14T18:00:00",
            "02/06/2024",
        ]
