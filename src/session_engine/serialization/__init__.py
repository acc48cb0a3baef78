"""Serialization module: SessionLog records as stored by the datastore and draft slot."""

from session_engine.serialization.records import (
    session_log_from_record,
    session_log_to_json_string,
    session_log_to_record,
)

__all__ = [
    "session_log_from_record",
    "session_log_to_json_string",
    "session_log_to_record",
]
