from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import DayType
from .strategies.base import CompensationStrategy
from .strategies.holiday_strategy import HolidayStrategy
from .strategies.saturday_strategy import SaturdayStrategy
from .strategies.weekday_strategy import WeekdayStrategy


@dataclass
class CompensationStrategyFactory:
    """Factory Pattern: choose the compensation strategy for a day class."""

    def for_day(self, day_type: DayType) -> CompensationStrategy:
        if day_type == DayType.SUNDAY_OR_HOLIDAY:
            return HolidayStrategy()
        if day_type == DayType.SATURDAY:
            return SaturdayStrategy()
        if day_type == DayType.WEEKDAY:
            return WeekdayStrategy()
        raise ValueError(f"Unsupported day type: {day_type!r}")
