"""Custom exception hierarchy for the remote log store client."""

from __future__ import annotations


class LogStoreError(Exception):
    """Base exception for all log_store errors."""


class LogStoreAuthError(LogStoreError):
    """The datastore rejected the API key or user token (401/403)."""


class PersistenceError(LogStoreError):
    """A datastore call failed; local draft state must be kept for retry."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class RateLimitError(PersistenceError):
    """HTTP 429: too many requests, even after retrying."""

    def __init__(self, message: str = "Rate limited by the datastore") -> None:
        super().__init__(message, status_code=429)
