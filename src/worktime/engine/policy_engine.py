from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import minutes_to_hours
from ..core.enums import CalculationMethod, DayType
from ..core.exceptions import ValidationError
from ..policies.model import PolicyConfig
from .compensation import ZERO, CompositeCompensation, Evaluation
from .factory import CompensationStrategyFactory
from .midnight import WorkedPartial
from .night import night_minutes

logger = logging.getLogger(__name__)


def governing_day_type(day_types: Sequence[DayType]) -> DayType:
    """Highest rate class among the given ones."""
    if DayType.SUNDAY_OR_HOLIDAY in day_types:
        return DayType.SUNDAY_OR_HOLIDAY
    if DayType.SATURDAY in day_types:
        return DayType.SATURDAY
    return DayType.WEEKDAY


class CompensationPolicyEngine:
    """Turns worked partials into compensation under one policy snapshot.

    Composition of a split session:
    * same class on both dates: rated as one session of that class;
    * a Sunday/holiday stretch next to another class: the whole duration is
      rated as Sunday/holiday (favoring the employee) and the result is
      marked ``complex_calculation``;
    * Saturday next to a weekday: each stretch is rated on its own, the
      Saturday one earning substitute leave and the weekday one ordinary hours.
    """

    def __init__(self, factory: Optional[CompensationStrategyFactory] = None):
        self._factory = factory or CompensationStrategyFactory()

    def evaluate(
        self,
        partials: Sequence[WorkedPartial],
        *,
        night_hours: Decimal,
        policy: PolicyConfig,
    ) -> Evaluation:
        if not partials:
            raise ValidationError("At least one worked partial is required")

        day_types = [p.day_type for p in partials]
        total = sum((p.net_hours for p in partials), ZERO)
        governing = governing_day_type(day_types)

        if len(set(day_types)) == 1:
            strategy = self._factory.for_day(governing)
            return Evaluation(
                compensation=strategy.compensate(duration=total, night_hours=night_hours, policy=policy),
                method=CalculationMethod.SINGLE_DAY,
                governing_day_type=governing,
            )

        route = " -> ".join(f"{p.partial.work_date.isoformat()}({p.day_type.value})" for p in partials)

        if governing == DayType.SUNDAY_OR_HOLIDAY:
            warning = f"Overnight session {route}: whole {total}h rated as sunday_or_holiday"
            logger.warning(warning)
            strategy = self._factory.for_day(DayType.SUNDAY_OR_HOLIDAY)
            return Evaluation(
                compensation=strategy.compensate(duration=total, night_hours=night_hours, policy=policy),
                method=CalculationMethod.COMPLEX_CALCULATION,
                governing_day_type=governing,
                warnings=(warning,),
            )

        parts = tuple(
            self._factory.for_day(p.day_type).compensate(
                duration=p.net_hours,
                night_hours=minutes_to_hours(night_minutes(p.partial.start_minute, p.partial.end_minute)),
                policy=policy,
            )
            for p in partials
        )
        return Evaluation(
            compensation=CompositeCompensation(parts=parts),
            method=CalculationMethod.SPLIT_BY_DATE,
            governing_day_type=governing,
            note=f"Overnight session {route} rated per date",
        )
