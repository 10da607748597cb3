from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, time
from decimal import Decimal
from typing import Callable, Optional, Sequence

from ..calendars.classifier import DayClassifier
from ..common.datetime_utils import now_local, round_hours
from ..common.validators import require_date_range, require_non_negative
from ..core.constants import MAX_RANGE_DAYS
from ..core.enums import WorkStatus
from ..core.exceptions import ValidationError
from .locks import InProcessKeyLocks, KeyLocks
from .model import DaySummary
from .repository import SummaryRepository

logger = logging.getLogger(__name__)

FIGURE_FIELDS = (
    "basic_hours",
    "overtime_hours",
    "night_hours",
    "substitute_leave_hours",
    "compensatory_leave_hours",
)


class SummaryService:
    def __init__(
        self,
        summaries: SummaryRepository,
        classifier: DayClassifier,
        *,
        locks: Optional[KeyLocks] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._summaries = summaries
        self._classifier = classifier
        self._locks = locks or InProcessKeyLocks()
        self._clock = clock

    def get(self, user_id: int, work_date: date) -> Optional[DaySummary]:
        return self._summaries.get(user_id, work_date)

    def list_for_user(self, user_id: int, *, start: date, end: date) -> Sequence[DaySummary]:
        require_date_range(start, end, max_days=MAX_RANGE_DAYS)
        return self._summaries.list_for_range(start_date=start, end_date=end, user_id=user_id)

    def override(
        self,
        user_id: int,
        work_date: date,
        *,
        figures: dict,
        work_status_tag: Optional[WorkStatus] = None,
        check_in_time: Optional[time] = None,
        check_out_time: Optional[time] = None,
        notes: Optional[str] = None,
    ) -> DaySummary:
        """Store administrator-entered figures for one day.

        The row is marked ``auto_calculated=False`` so punch writes no longer
        recompute it; a forced recompute hands it back to the engine.
        """

        unknown = set(figures) - set(FIGURE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown summary fields: {', '.join(sorted(unknown))}")
        values = {name: round_hours(Decimal(str(require_non_negative(v, name)))) for name, v in figures.items()}

        with self._locks.hold(user_id, work_date):
            existing = self._summaries.get(user_id, work_date)
            if existing is None:
                classification = self._classifier.classify(work_date)
                base = DaySummary(
                    user_id=int(user_id),
                    work_date=work_date,
                    check_in_time=None,
                    check_out_time=None,
                    basic_hours=0.0,
                    overtime_hours=0.0,
                    night_hours=0.0,
                    substitute_leave_hours=0.0,
                    compensatory_leave_hours=0.0,
                    work_status_tag=WorkStatus.NORMAL,
                    is_holiday=classification.is_holiday,
                    auto_calculated=False,
                    calculated_at=self._clock(),
                    day_type=classification.day_type,
                    holiday_name=classification.holiday_name,
                )
            else:
                base = existing

            summary = replace(
                base,
                check_in_time=check_in_time or base.check_in_time,
                check_out_time=check_out_time or base.check_out_time,
                work_status_tag=work_status_tag or base.work_status_tag,
                notes=notes if notes is not None else base.notes,
                auto_calculated=False,
                calculated_at=self._clock().replace(microsecond=0),
                **values,
            )
            self._summaries.upsert(summary)

        logger.info("Manual override stored user=%s date=%s", user_id, work_date)
        return summary
