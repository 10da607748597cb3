from __future__ import annotations

from decimal import Decimal

from ...policies.model import PolicyConfig
from ..compensation import ZERO, WeekdayCompensation
from .base import CompensationStrategy


class WeekdayStrategy(CompensationStrategy):
    """Ordinary day: hours past the threshold are overtime."""

    def compensate(self, *, duration: Decimal, night_hours: Decimal, policy: PolicyConfig) -> WeekdayCompensation:
        threshold = policy.threshold
        return WeekdayCompensation(
            duration=duration,
            basic=min(duration, threshold),
            overtime=max(ZERO, duration - threshold),
        )
