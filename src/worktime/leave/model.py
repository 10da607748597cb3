from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class LeaveGrant:
    grant_id: int
    user_id: int
    start_date: date
    end_date: date
    leave_kind: str
    full_day: bool
    status: RequestStatus
    hours: Optional[float] = None  # partial-day grants only

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class LeaveOverride:
    """Replaces punch-based computation for a whole day."""

    grant_id: int
    leave_kind: str
    hours: Decimal
    full_day: bool

    @property
    def note(self) -> str:
        extent = "full day" if self.full_day else f"{self.hours}h"
        return f"leave:{self.leave_kind} ({extent}, grant #{self.grant_id})"
