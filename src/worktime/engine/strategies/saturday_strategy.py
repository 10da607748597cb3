from __future__ import annotations

from decimal import Decimal

from ...policies.model import PolicyConfig
from ..compensation import ZERO, SaturdayCompensation
from .base import CompensationStrategy


class SaturdayStrategy(CompensationStrategy):
    """Saturday work earns substitute leave: base hours at 1x, the rest at
    the Saturday premium. Never less than the hours worked."""

    def compensate(self, *, duration: Decimal, night_hours: Decimal, policy: PolicyConfig) -> SaturdayCompensation:
        base = policy.leave_base
        credit = min(duration, base) + max(ZERO, duration - base) * policy.saturday_multiplier
        return SaturdayCompensation(duration=duration, basic=duration, substitute_leave=credit)
