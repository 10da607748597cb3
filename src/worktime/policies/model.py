from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..core import constants
from ..core.exceptions import PolicyConfigMissing

REQUIRED_FIELDS = (
    "overtime_threshold_hours",
    "saturday_rate",
    "sunday_or_holiday_rate",
    "night_rate",
    "meal_break_minutes",
    "meal_break_trigger_hours",
    "dinner_break_minutes",
    "dinner_break_trigger_hours",
)


def _dec(value: Any) -> Decimal:
    return Decimal(str(value))


@dataclass(frozen=True)
class PolicyConfig:
    """Immutable rate table snapshot, read once per computation.

    Rates are multipliers; thresholds are hours; breaks are minutes.
    """

    overtime_threshold_hours: float = constants.DEFAULT_OVERTIME_THRESHOLD_HOURS
    saturday_rate: float = constants.DEFAULT_SATURDAY_RATE
    sunday_or_holiday_rate: float = constants.DEFAULT_SUNDAY_OR_HOLIDAY_RATE
    night_rate: float = constants.DEFAULT_NIGHT_RATE
    meal_break_minutes: int = constants.DEFAULT_MEAL_BREAK_MINUTES
    meal_break_trigger_hours: float = constants.DEFAULT_MEAL_BREAK_TRIGGER_HOURS
    dinner_break_minutes: int = constants.DEFAULT_DINNER_BREAK_MINUTES
    dinner_break_trigger_hours: float = constants.DEFAULT_DINNER_BREAK_TRIGGER_HOURS
    sunday_overtime_rate: float = constants.DEFAULT_SUNDAY_OVERTIME_RATE
    leave_base_hours: float = constants.DEFAULT_LEAVE_BASE_HOURS
    full_day_leave_hours: float = constants.DEFAULT_FULL_DAY_LEAVE_HOURS
    max_shift_hours: float = constants.DEFAULT_MAX_SHIFT_HOURS
    effective_from: Optional[date] = None
    version: str = "default"

    # Decimal views used by the engine so no float arithmetic leaks in.

    @property
    def threshold(self) -> Decimal:
        return _dec(self.overtime_threshold_hours)

    @property
    def leave_base(self) -> Decimal:
        return _dec(self.leave_base_hours)

    @property
    def saturday_multiplier(self) -> Decimal:
        return _dec(self.saturday_rate)

    @property
    def holiday_multiplier(self) -> Decimal:
        return _dec(self.sunday_or_holiday_rate)

    @property
    def holiday_overtime_multiplier(self) -> Decimal:
        return _dec(self.sunday_overtime_rate)

    @property
    def holiday_night_premium(self) -> Decimal:
        """Extra credit per night hour on Sunday/holiday work (1.5x -> +0.5)."""
        return max(Decimal(0), _dec(self.night_rate) - Decimal(1))

    @property
    def meal_trigger_minutes(self) -> int:
        return int(_dec(self.meal_break_trigger_hours) * 60)

    @property
    def dinner_trigger_minutes(self) -> int:
        return int(_dec(self.dinner_break_trigger_hours) * 60)

    @property
    def max_shift_minutes(self) -> int:
        return int(_dec(self.max_shift_hours) * 60)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "PolicyConfig":
        missing = [name for name in REQUIRED_FIELDS if row.get(name) is None]
        if missing:
            raise PolicyConfigMissing(f"Policy row lacks: {', '.join(missing)}")

        def opt(name: str, default: float) -> float:
            value = row.get(name)
            return float(value) if value is not None else default

        return cls(
            overtime_threshold_hours=float(row["overtime_threshold_hours"]),
            saturday_rate=float(row["saturday_rate"]),
            sunday_or_holiday_rate=float(row["sunday_or_holiday_rate"]),
            night_rate=float(row["night_rate"]),
            meal_break_minutes=int(row["meal_break_minutes"]),
            meal_break_trigger_hours=float(row["meal_break_trigger_hours"]),
            dinner_break_minutes=int(row["dinner_break_minutes"]),
            dinner_break_trigger_hours=float(row["dinner_break_trigger_hours"]),
            sunday_overtime_rate=opt("sunday_overtime_rate", constants.DEFAULT_SUNDAY_OVERTIME_RATE),
            leave_base_hours=opt("leave_base_hours", constants.DEFAULT_LEAVE_BASE_HOURS),
            full_day_leave_hours=opt("full_day_leave_hours", constants.DEFAULT_FULL_DAY_LEAVE_HOURS),
            max_shift_hours=opt("max_shift_hours", constants.DEFAULT_MAX_SHIFT_HOURS),
            effective_from=row.get("effective_from"),
            version=str(row.get("version") or "default"),
        )
