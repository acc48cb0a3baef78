"""Exception hierarchy for the session recorder core."""

from __future__ import annotations


class SessionEngineError(Exception):
    """Base exception for all session_engine errors."""


class InvalidRetroDateError(SessionEngineError, ValueError):
    """The chosen retroactive date is not a real calendar day."""


class IncompleteDateError(InvalidRetroDateError):
    """Retroactive mode is on but day, month or year was not chosen."""


class DraftStateError(SessionEngineError):
    """The requested operation is not allowed in the current draft state."""


class FinalizeInProgressError(DraftStateError):
    """A finalize call is already outstanding for this draft."""


class InvalidRpeError(SessionEngineError, ValueError):
    """RPE outside the 1-10 scale."""


class DraftSlotError(SessionEngineError):
    """The durable draft slot holds content that cannot be decoded."""


class UnparseableDateError(SessionEngineError, ValueError):
    """Internal: a stored date string matches no known encoding.

    Never escapes the history package; normalization turns it into the
    unknown-date sentinel.
    """


class MalformedPlanEntryError(SessionEngineError, ValueError):
    """Internal: a plan's target-sets text yields no set count.

    Never escapes the plan reader; the default set count is used instead.
    """
