from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..calendars.classifier import DayClassifier
from ..common.datetime_utils import iter_dates, now_local
from ..common.validators import require_date_range
from ..core.constants import MAX_RANGE_DAYS
from ..engine.calculator import WorkDayCalculator
from ..leave.resolver import LeaveResolver
from ..policies.service import PolicyService
from ..punches.repository import PunchRepository
from .locks import InProcessKeyLocks, KeyLocks
from .model import DaySummary
from .repository import SummaryRepository

logger = logging.getLogger(__name__)


class RecalculationOrchestrator:
    """Recomputes and stores the summary of one (user, date).

    Every lookup happens before the single write, so a failing holiday,
    leave or policy source leaves the stored row as it was. Recomputations
    of the same key are serialized through ``locks``.
    """

    def __init__(
        self,
        punches: PunchRepository,
        summaries: SummaryRepository,
        classifier: DayClassifier,
        leave: LeaveResolver,
        policies: PolicyService,
        *,
        locks: Optional[KeyLocks] = None,
        calculator: Optional[WorkDayCalculator] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._punches = punches
        self._summaries = summaries
        self._classifier = classifier
        self._leave = leave
        self._policies = policies
        self._locks = locks or InProcessKeyLocks()
        self._calculator = calculator or WorkDayCalculator(classifier)
        self._clock = clock

    def recalculate(self, user_id: int, work_date: date, *, force: bool = False) -> DaySummary:
        logger.debug("Recalculating user=%s date=%s force=%s", user_id, work_date, force)
        policy = self._policies.snapshot_for(work_date)

        with self._locks.hold(user_id, work_date):
            existing = self._summaries.get(user_id, work_date)
            if existing is not None and not existing.auto_calculated and not force:
                logger.info("Skipping manually set summary user=%s date=%s", user_id, work_date)
                return existing

            punches = self._punches.list_for_user_and_date(user_id, work_date)
            classification = self._classifier.classify(work_date)
            leave = self._leave.resolve(user_id, work_date, policy)

            computation = self._calculator.calculate(
                user_id=user_id,
                work_date=work_date,
                punches=punches,
                classification=classification,
                leave=leave,
                policy=policy,
            )
            summary = DaySummary.from_computation(computation, calculated_at=self._clock())

            if existing is not None and existing.same_figures(summary):
                logger.info("Summary unchanged user=%s date=%s", user_id, work_date)
                return existing

            self._summaries.upsert(summary)

        logger.info(
            "Stored summary user=%s date=%s status=%s method=%s",
            user_id,
            work_date,
            summary.work_status_tag.value,
            summary.calculation_method.value if summary.calculation_method else "-",
        )
        return summary

    def recalculate_range(
        self,
        user_id: int,
        start: date,
        end: date,
        *,
        force: bool = False,
    ) -> list[DaySummary]:
        require_date_range(start, end, max_days=MAX_RANGE_DAYS)
        return [self.recalculate(user_id, day, force=force) for day in iter_dates(start, end)]
