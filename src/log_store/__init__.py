"""Remote datastore client: all plan/log network I/O lives here."""

from log_store.client import LogStoreClient
from log_store.exceptions import (
    LogStoreAuthError,
    LogStoreError,
    PersistenceError,
    RateLimitError,
)
from log_store.rows import map_plan_row, map_session_log_row, session_log_to_row

__all__ = [
    "LogStoreClient",
    "LogStoreAuthError",
    "LogStoreError",
    "PersistenceError",
    "RateLimitError",
    "map_plan_row",
    "map_session_log_row",
    "session_log_to_row",
]
