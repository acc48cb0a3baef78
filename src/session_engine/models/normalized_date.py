"""Tagged result of history date normalization."""

from __future__ import annotations

from dataclasses import dataclass

from session_engine.models.enums import (
    MONTH_ABBREVIATIONS,
    UNKNOWN_DAY,
    UNKNOWN_MONTH,
    UNKNOWN_YEAR,
)


@dataclass(frozen=True)
class NormalizedDate:
    """Calendar date recovered from a stored timestamp string.

    Valid dates carry ``year``, a 0-based ``month`` index and ``day``.
    Unparseable input yields :data:`UNKNOWN_DATE`, whose ``year`` of 0
    means "unknown" and must never be read as a real calendar year.
    """

    is_valid: bool
    year: int
    month: int | str
    day: int | str

    @property
    def calendar_key(self) -> str | None:
        """Zero-padded ``YYYY-MM-DD`` key, or None when unknown."""
        if not self.is_valid:
            return None
        return f"{self.year:04d}-{self.month + 1:02d}-{self.day:02d}"

    @property
    def month_name(self) -> str:
        if not self.is_valid:
            return UNKNOWN_MONTH
        return MONTH_ABBREVIATIONS[self.month]


UNKNOWN_DATE = NormalizedDate(
    is_valid=False,
    year=UNKNOWN_YEAR,
    month=UNKNOWN_MONTH,
    day=UNKNOWN_DAY,
)
