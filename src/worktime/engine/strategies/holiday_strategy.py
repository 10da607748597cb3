from __future__ import annotations

from decimal import Decimal

from ...policies.model import PolicyConfig
from ..compensation import ZERO, HolidayCompensation
from .base import CompensationStrategy


class HolidayStrategy(CompensationStrategy):
    """Sunday/holiday work earns compensatory leave, plus a night premium
    that only applies on this day class."""

    def compensate(self, *, duration: Decimal, night_hours: Decimal, policy: PolicyConfig) -> HolidayCompensation:
        base = policy.leave_base
        premium = night_hours * policy.holiday_night_premium
        credit = (
            min(duration, base) * policy.holiday_multiplier
            + max(ZERO, duration - base) * policy.holiday_overtime_multiplier
            + premium
        )
        return HolidayCompensation(
            duration=duration,
            basic=duration,
            compensatory_leave=credit,
            night_premium=premium,
        )
