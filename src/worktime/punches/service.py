from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_positive_int
from ..core.enums import PunchKind, WorkStatus
from ..core.exceptions import ValidationError
from ..summaries.model import DaySummary
from ..summaries.orchestrator import RecalculationOrchestrator
from .aggregator import aggregate_punches
from .repository import PunchRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PunchResult:
    punch_id: int
    summaries: tuple[DaySummary, ...]


class PunchService:
    """Writes punches and recomputes every day a write touched.

    The recomputation runs before the call returns, so callers always see
    a summary that reflects the punch they just wrote.
    """

    def __init__(self, punches: PunchRepository, orchestrator: RecalculationOrchestrator):
        self._punches = punches
        self._orchestrator = orchestrator

    def record_punch(
        self,
        *,
        user_id: int,
        work_date: date,
        time_of_day: time,
        kind: PunchKind,
        had_dinner: bool = False,
        is_manual: bool = False,
    ) -> PunchResult:
        user_id = require_positive_int(user_id, "user_id")
        if had_dinner and kind != PunchKind.CHECK_OUT:
            raise ValidationError("had_dinner can only be set on a check-out")

        punch_id = self._punches.create(
            user_id=user_id,
            work_date=work_date,
            time_of_day=time_of_day.replace(microsecond=0),
            kind=kind,
            had_dinner=had_dinner,
            is_manual=is_manual,
        )
        logger.info("Recorded %s user=%s date=%s time=%s", kind.value, user_id, work_date, time_of_day)
        summary = self._orchestrator.recalculate(user_id, work_date)
        return PunchResult(punch_id=punch_id, summaries=(summary,))

    def check_in(self, user_id: int, *, now: Optional[datetime] = None) -> PunchResult:
        now = now or now_local()
        return self.record_punch(
            user_id=user_id,
            work_date=now.date(),
            time_of_day=now.time(),
            kind=PunchKind.CHECK_IN,
        )

    def check_out(self, user_id: int, *, now: Optional[datetime] = None, had_dinner: bool = False) -> PunchResult:
        """Check out now.

        A check-out on a day without any check-in closes yesterday's session
        when that one is still open (overnight shift), so it is stored under
        yesterday's date.
        """

        now = now or now_local()
        today = now.date()
        work_date = today

        today_bounds = aggregate_punches(self._punches.list_for_user_and_date(user_id, today))
        if today_bounds.first_check_in is None:
            yesterday = today - timedelta(days=1)
            prev = aggregate_punches(self._punches.list_for_user_and_date(user_id, yesterday))
            if prev.missing == WorkStatus.CHECKOUT_MISSING:
                logger.info("Attributing check-out of user=%s to open session on %s", user_id, yesterday)
                work_date = yesterday

        return self.record_punch(
            user_id=user_id,
            work_date=work_date,
            time_of_day=now.time(),
            kind=PunchKind.CHECK_OUT,
            had_dinner=had_dinner,
        )

    def correct_punch(
        self,
        punch_id: int,
        *,
        work_date: Optional[date] = None,
        time_of_day: Optional[time] = None,
        had_dinner: Optional[bool] = None,
    ) -> PunchResult:
        punch = self._punches.get_by_id(punch_id)
        if punch is None:
            raise ValidationError(f"Punch {punch_id} does not exist")

        new_dinner = punch.had_dinner if had_dinner is None else bool(had_dinner)
        if new_dinner and punch.kind != PunchKind.CHECK_OUT:
            raise ValidationError("had_dinner can only be set on a check-out")

        new_date = work_date or punch.work_date
        self._punches.update(
            punch_id=punch_id,
            work_date=new_date,
            time_of_day=(time_of_day or punch.time_of_day).replace(microsecond=0),
            had_dinner=new_dinner,
        )
        logger.info("Corrected punch #%s user=%s date=%s", punch_id, punch.user_id, new_date)
        return PunchResult(punch_id=punch_id, summaries=self._recalculate_dates(punch.user_id, punch.work_date, new_date))

    def delete_punch(self, punch_id: int) -> PunchResult:
        punch = self._punches.get_by_id(punch_id)
        if punch is None:
            raise ValidationError(f"Punch {punch_id} does not exist")

        self._punches.delete(punch_id)
        logger.info("Deleted punch #%s user=%s date=%s", punch_id, punch.user_id, punch.work_date)
        return PunchResult(punch_id=punch_id, summaries=self._recalculate_dates(punch.user_id, punch.work_date))

    def _recalculate_dates(self, user_id: int, *days: date) -> tuple[DaySummary, ...]:
        return tuple(self._orchestrator.recalculate(user_id, d) for d in sorted(set(days)))
