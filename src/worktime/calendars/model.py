from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import DayType


@dataclass(frozen=True)
class HolidayInfo:
    is_holiday: bool
    name: Optional[str] = None


@dataclass(frozen=True)
class DayClassification:
    day: date
    day_type: DayType
    is_holiday: bool = False
    holiday_name: Optional[str] = None
