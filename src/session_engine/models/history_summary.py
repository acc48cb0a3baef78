"""Aggregate views over a session history."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from session_engine.models.enums import Period
from session_engine.models.session_log import SessionLog


@dataclass(frozen=True)
class MonthlySummary:
    """Sessions recorded in one calendar month."""

    session_count: int = 0
    total_minutes: int = 0
    average_rpe: float | None = None  # one decimal, None when no session has an RPE

    @property
    def total_hours(self) -> int:
        """Whole hours trained, rounded half up."""
        return math.floor(self.total_minutes / 60 + 0.5)


@dataclass(frozen=True)
class PeriodGroup:
    """History entries falling into one display period."""

    period: Period
    sessions: tuple[SessionLog, ...] = field(default_factory=tuple)
