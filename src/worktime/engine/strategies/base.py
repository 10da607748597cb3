from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ...policies.model import PolicyConfig
from ..compensation import DayCompensation


class CompensationStrategy(ABC):
    """Strategy Pattern: how worked hours of one day class are compensated."""

    @abstractmethod
    def compensate(self, *, duration: Decimal, night_hours: Decimal, policy: PolicyConfig) -> DayCompensation:
        raise NotImplementedError
