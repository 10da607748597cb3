from __future__ import annotations

import logging
from datetime import date

from ..core.enums import DayType
from ..core.exceptions import LookupUnavailable
from .model import DayClassification
from .repository import HolidayCalendar

logger = logging.getLogger(__name__)

SATURDAY = 5
SUNDAY = 6


class DayClassifier:
    """Maps a date to its rate class.

    A holiday always wins over the weekday name: a holiday on a Tuesday is
    ``sunday_or_holiday``. A failing holiday source is never read as
    "not a holiday"; the error propagates so no summary is written.
    """

    def __init__(self, holidays: HolidayCalendar):
        self._holidays = holidays

    def classify(self, day: date) -> DayClassification:
        try:
            info = self._holidays.is_holiday(day)
        except LookupUnavailable:
            raise
        except Exception as exc:
            logger.error("Holiday lookup for %s failed: %s", day, exc)
            raise LookupUnavailable(f"Holiday lookup for {day} failed: {exc}") from exc

        weekday = day.weekday()
        if info.is_holiday or weekday == SUNDAY:
            day_type = DayType.SUNDAY_OR_HOLIDAY
        elif weekday == SATURDAY:
            day_type = DayType.SATURDAY
        else:
            day_type = DayType.WEEKDAY

        return DayClassification(
            day=day,
            day_type=day_type,
            is_holiday=bool(info.is_holiday),
            holiday_name=info.name if info.is_holiday else None,
        )
