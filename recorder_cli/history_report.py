"""Recorder CLI: history summary and draft-slot housekeeping.

Usage:
    python -m recorder_cli.history_report --summary      # stats from the datastore
    python -m recorder_cli.history_report --draft        # inspect the autosaved draft
    python -m recorder_cli.history_report --clear-draft  # discard the autosaved draft
"""

from __future__ import annotations

import argparse
import logging
from datetime import datetime
from typing import Optional

from log_store import LogStoreClient, LogStoreError
from session_engine.draft.slot import DraftSlot
from session_engine.exceptions import DraftSlotError
from session_engine.history import (
    monthly_summary,
    monthly_totals,
    training_streak,
    weekly_count,
)
from session_engine.models.session_log import SessionLog

from recorder_cli.config import (
    ATHLETE_ID,
    DRAFT_SLOT_PATH,
    STORE_TIMEOUT_S,
    SUPABASE_KEY,
    SUPABASE_URL,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def format_summary(history: list[SessionLog], as_of: Optional[datetime] = None) -> str:
    """Human-readable stats block for *history*."""
    month = monthly_summary(history, as_of)
    lines = [
        f"Sessions this week:  {weekly_count(history, as_of)}",
        f"Sessions this month: {month.session_count} "
        f"({month.total_minutes} min, {month.total_hours} h)",
        f"Training streak:     {training_streak(history, as_of)} day(s)",
    ]
    if month.average_rpe is not None:
        lines.append(f"Average RPE (month): {month.average_rpe}")

    totals = monthly_totals(history)
    if not totals.empty:
        lines.append("")
        lines.append(totals.to_string())
    return "\n".join(lines)


def format_draft(slot: DraftSlot) -> str:
    """One-paragraph description of the draft waiting in *slot*."""
    draft = slot.read()
    if draft is None:
        return f"No draft in {slot.path}"
    mode = "editing " + draft.log_id if draft.is_edit_mode else "new session"
    return (
        f"Draft {draft.session_key.session_code or '(no session code)'} ({mode}), "
        f"started {draft.started_at.isoformat()}, "
        f"{draft.completed_sets}/{draft.total_sets} sets completed"
    )


def summary_job() -> int:
    """Load the athlete's history and print the summary; returns an exit code."""
    if not (SUPABASE_URL and SUPABASE_KEY and ATHLETE_ID):
        logger.error("SUPABASE_URL, SUPABASE_KEY and ATHLETE_ID must be set")
        return 2

    client = LogStoreClient(
        base_url=SUPABASE_URL,
        api_key=SUPABASE_KEY,
        athlete_id=ATHLETE_ID,
        timeout=STORE_TIMEOUT_S,
    )
    try:
        history = client.load_history()
    except LogStoreError as exc:
        logger.error("Failed to load history: %s", exc)
        return 1

    print(format_summary(history))
    return 0


def draft_job(clear: bool = False) -> int:
    """Print or discard the autosaved draft; returns an exit code."""
    slot = DraftSlot(DRAFT_SLOT_PATH)
    if clear:
        slot.clear()
        return 0
    try:
        print(format_draft(slot))
    except DraftSlotError as exc:
        logger.error("Draft slot is unreadable: %s", exc)
        return 1
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Workout session recorder tools")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--summary", action="store_true", help="Print history stats")
    group.add_argument("--draft", action="store_true", help="Show the autosaved draft")
    group.add_argument(
        "--clear-draft", action="store_true", help="Discard the autosaved draft"
    )
    args = parser.parse_args(argv)

    if args.summary:
        return summary_job()
    return draft_job(clear=args.clear_draft)


if __name__ == "__main__":
    raise SystemExit(main())
