from __future__ import annotations

from datetime import date
from typing import Protocol

from .model import HolidayInfo


class HolidayCalendar(Protocol):
    def is_holiday(self, day: date) -> HolidayInfo:
        """Raise LookupUnavailable when the source cannot be read."""

        raise NotImplementedError
