from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence, Tuple

from ..core.enums import DayType


@dataclass(frozen=True)
class RiskAssessment:
    level: str  # low | medium | high | critical
    factors: Tuple[str, ...] = ()

    def as_note(self) -> str | None:
        if self.level == "low":
            return None
        return f"risk={self.level}: " + "; ".join(self.factors)


def assess_session_risk(
    *,
    total_hours: Decimal,
    night_hours: Decimal,
    day_types: Sequence[DayType],
    warnings: Sequence[str] = (),
) -> RiskAssessment:
    """Audit hint for long, night-heavy or class-straddling sessions."""

    factors: list[str] = []
    if total_hours > 12:
        factors.append(f"long session ({total_hours:.1f}h)")
    if night_hours > 4:
        factors.append(f"long night work ({night_hours:.1f}h)")
    if len(set(day_types)) > 1:
        factors.append(" -> ".join(t.value for t in day_types))
    factors.extend(warnings)

    if total_hours > 15 or night_hours > 6:
        level = "critical"
    elif total_hours > 12 or night_hours > 4 or len(factors) > 2:
        level = "high"
    elif total_hours > 10 or night_hours > 2 or factors:
        level = "medium"
    else:
        level = "low"
    return RiskAssessment(level=level, factors=tuple(factors))
