from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from .model import HolidayInfo
from .repository import HolidayCalendar


@dataclass
class StaticHolidayCalendar(HolidayCalendar):
    """In-memory holiday table (date -> name) for `assemble()` wiring and tests."""

    holidays: dict[date, str] = field(default_factory=dict)

    def is_holiday(self, day: date) -> HolidayInfo:
        name = self.holidays.get(day)
        if name is None:
            return HolidayInfo(is_holiday=False)
        return HolidayInfo(is_holiday=True, name=name)
