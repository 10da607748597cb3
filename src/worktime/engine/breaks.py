from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import minutes_to_hours
from ..policies.model import PolicyConfig


@dataclass(frozen=True)
class BreakBreakdown:
    raw_minutes: int
    meal_break_minutes: int = 0
    dinner_break_minutes: int = 0

    @property
    def break_minutes(self) -> int:
        return self.meal_break_minutes + self.dinner_break_minutes

    @property
    def net_minutes(self) -> int:
        return max(0, self.raw_minutes - self.break_minutes)

    @property
    def net_hours(self) -> Decimal:
        return minutes_to_hours(self.net_minutes)


def calculate_breaks(
    start_minute: int,
    end_minute: int,
    *,
    had_dinner: bool,
    policy: PolicyConfig,
    dinner_span_minutes: Optional[int] = None,
) -> BreakBreakdown:
    """Net worked time of one same-day stretch [start_minute, end_minute).

    Dinner is a check-out attribute, not a property of the duration: pass
    ``had_dinner=True`` only for the stretch that ends at the real check-out.
    For a split overnight session that stretch is only part of the shift, so
    the dinner trigger is tested against ``dinner_span_minutes`` (the whole
    session) instead of the stretch itself.
    """

    raw = max(0, int(end_minute) - int(start_minute))

    meal = int(policy.meal_break_minutes) if raw >= policy.meal_trigger_minutes else 0

    span = raw if dinner_span_minutes is None else int(dinner_span_minutes)
    dinner = 0
    if had_dinner and span >= policy.dinner_trigger_minutes:
        dinner = int(policy.dinner_break_minutes)

    return BreakBreakdown(raw_minutes=raw, meal_break_minutes=meal, dinner_break_minutes=dinner)
