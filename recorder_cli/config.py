"""Environment-variable-based configuration for the recorder CLI."""

from __future__ import annotations

import os
from pathlib import Path

SUPABASE_URL: str = os.environ.get("SUPABASE_URL", "")
SUPABASE_KEY: str = os.environ.get("SUPABASE_KEY", "")
ATHLETE_ID: str = os.environ.get("ATHLETE_ID", "")
DRAFT_SLOT_PATH: Path = Path(
    os.environ.get("DRAFT_SLOT_PATH", "~/.session_recorder/active_session.json")
).expanduser()
STORE_TIMEOUT_S: float = float(os.environ.get("STORE_TIMEOUT_S", "30"))
