from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import date, datetime, time
from typing import Any, Optional

from ..common.datetime_utils import round_hours
from ..core.enums import CalculationMethod, DayType, WorkStatus
from ..engine.calculator import DayComputation


@dataclass(frozen=True)
class DaySummary:
    """Persisted per (user_id, work_date) result. Exactly one row per key.

    ``auto_calculated=False`` marks a row an administrator set by hand; the
    orchestrator leaves it alone unless a recompute is forced.
    """

    user_id: int
    work_date: date
    check_in_time: Optional[time]
    check_out_time: Optional[time]
    basic_hours: float
    overtime_hours: float
    night_hours: float
    substitute_leave_hours: float
    compensatory_leave_hours: float
    work_status_tag: WorkStatus
    is_holiday: bool
    auto_calculated: bool
    calculated_at: datetime
    day_type: DayType = DayType.WEEKDAY
    holiday_name: Optional[str] = None
    break_minutes: int = 0
    had_dinner: bool = False
    calculation_method: Optional[CalculationMethod] = None
    notes: Optional[str] = None

    @property
    def is_incomplete(self) -> bool:
        return self.work_status_tag in (
            WorkStatus.CHECKIN_MISSING,
            WorkStatus.CHECKOUT_MISSING,
            WorkStatus.ANOMALY,
        )

    def same_figures(self, other: "DaySummary") -> bool:
        """Equal in everything but ``calculated_at``."""
        return all(
            getattr(self, f.name) == getattr(other, f.name)
            for f in fields(self)
            if f.name != "calculated_at"
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["work_date"] = self.work_date.isoformat()
        data["check_in_time"] = self.check_in_time.strftime("%H:%M") if self.check_in_time else None
        data["check_out_time"] = self.check_out_time.strftime("%H:%M") if self.check_out_time else None
        data["work_status_tag"] = self.work_status_tag.value
        data["day_type"] = self.day_type.value
        data["calculation_method"] = self.calculation_method.value if self.calculation_method else None
        data["calculated_at"] = self.calculated_at.isoformat(timespec="seconds")
        return data

    @classmethod
    def from_computation(cls, comp: DayComputation, *, calculated_at: datetime) -> "DaySummary":
        # The only rounding step of the whole pipeline.
        return cls(
            user_id=int(comp.user_id),
            work_date=comp.work_date,
            check_in_time=comp.check_in_time,
            check_out_time=comp.check_out_time,
            basic_hours=round_hours(comp.hours.basic),
            overtime_hours=round_hours(comp.hours.overtime),
            night_hours=round_hours(comp.night_hours),
            substitute_leave_hours=round_hours(comp.hours.substitute_leave),
            compensatory_leave_hours=round_hours(comp.hours.compensatory_leave),
            work_status_tag=comp.status,
            is_holiday=comp.classification.is_holiday,
            auto_calculated=True,
            calculated_at=calculated_at.replace(microsecond=0),
            day_type=comp.classification.day_type,
            holiday_name=comp.classification.holiday_name,
            break_minutes=int(comp.break_minutes),
            had_dinner=bool(comp.had_dinner),
            calculation_method=comp.method,
            notes="; ".join(comp.notes) if comp.notes else None,
        )
