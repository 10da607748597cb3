from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import PunchKind, WorkStatus


@dataclass(frozen=True)
class PunchEvent:
    """A single recorded check-in or check-out. Immutable once recorded."""

    user_id: int
    work_date: date
    time_of_day: time
    kind: PunchKind
    had_dinner: bool = False  # only meaningful on check-out
    is_manual: bool = False
    punch_id: Optional[int] = None


@dataclass(frozen=True)
class PunchBounds:
    """Outer bounds of a day's punches: earliest check-in, latest check-out."""

    first_check_in: Optional[time]
    last_check_out: Optional[time]
    had_dinner: bool = False
    is_manual: bool = False

    @property
    def missing(self) -> Optional[WorkStatus]:
        if self.first_check_in is None and self.last_check_out is None:
            return WorkStatus.ABSENT
        if self.first_check_in is None:
            return WorkStatus.CHECKIN_MISSING
        if self.last_check_out is None:
            return WorkStatus.CHECKOUT_MISSING
        return None

    @property
    def is_complete(self) -> bool:
        return self.missing is None
