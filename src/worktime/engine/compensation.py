from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import ClassVar, Optional, Tuple, Union

from ..core.enums import CalculationMethod, DayType

ZERO = Decimal(0)


@dataclass(frozen=True)
class CompensationHours:
    """Unrounded hour figures; rounding happens once, on the summary."""

    basic: Decimal = ZERO
    overtime: Decimal = ZERO
    substitute_leave: Decimal = ZERO
    compensatory_leave: Decimal = ZERO

    def __add__(self, other: "CompensationHours") -> "CompensationHours":
        return CompensationHours(
            basic=self.basic + other.basic,
            overtime=self.overtime + other.overtime,
            substitute_leave=self.substitute_leave + other.substitute_leave,
            compensatory_leave=self.compensatory_leave + other.compensatory_leave,
        )


@dataclass(frozen=True)
class WeekdayCompensation:
    day_type: ClassVar[DayType] = DayType.WEEKDAY

    duration: Decimal
    basic: Decimal
    overtime: Decimal

    def hours(self) -> CompensationHours:
        return CompensationHours(basic=self.basic, overtime=self.overtime)


@dataclass(frozen=True)
class SaturdayCompensation:
    day_type: ClassVar[DayType] = DayType.SATURDAY

    duration: Decimal
    basic: Decimal
    substitute_leave: Decimal

    def hours(self) -> CompensationHours:
        return CompensationHours(basic=self.basic, substitute_leave=self.substitute_leave)


@dataclass(frozen=True)
class HolidayCompensation:
    day_type: ClassVar[DayType] = DayType.SUNDAY_OR_HOLIDAY

    duration: Decimal
    basic: Decimal
    compensatory_leave: Decimal
    night_premium: Decimal = ZERO

    def hours(self) -> CompensationHours:
        return CompensationHours(basic=self.basic, compensatory_leave=self.compensatory_leave)


DayCompensation = Union[WeekdayCompensation, SaturdayCompensation, HolidayCompensation]


@dataclass(frozen=True)
class CompositeCompensation:
    """Per-date parts of a split session rated at different classes."""

    parts: Tuple[DayCompensation, ...]

    @property
    def duration(self) -> Decimal:
        return sum((p.duration for p in self.parts), ZERO)

    def hours(self) -> CompensationHours:
        total = CompensationHours()
        for part in self.parts:
            total = total + part.hours()
        return total


Compensation = Union[WeekdayCompensation, SaturdayCompensation, HolidayCompensation, CompositeCompensation]


@dataclass(frozen=True)
class Evaluation:
    compensation: Compensation
    method: CalculationMethod
    governing_day_type: DayType
    warnings: Tuple[str, ...] = field(default_factory=tuple)
    note: Optional[str] = None

    @property
    def is_complex(self) -> bool:
        return self.method == CalculationMethod.COMPLEX_CALCULATION
