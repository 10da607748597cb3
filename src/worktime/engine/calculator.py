from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, time
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from ..calendars.classifier import DayClassifier
from ..calendars.model import DayClassification
from ..core.enums import CalculationMethod, DayType, SessionState, WorkStatus
from ..core.exceptions import IncompletePunchData, InvalidTimeOrdering
from ..leave.model import LeaveOverride
from ..policies.model import PolicyConfig
from ..punches.aggregator import aggregate_punches
from ..punches.model import PunchBounds, PunchEvent
from .breaks import calculate_breaks
from .compensation import ZERO, CompensationHours
from .midnight import MidnightSplitResolver, WorkedPartial, WorkSession, build_session
from .night import night_hours as session_night_hours
from .policy_engine import CompensationPolicyEngine
from .risk import assess_session_risk

logger = logging.getLogger(__name__)

STATUS_BY_DAY_TYPE = {
    DayType.WEEKDAY: WorkStatus.NORMAL,
    DayType.SATURDAY: WorkStatus.SATURDAY_WORK,
    DayType.SUNDAY_OR_HOLIDAY: WorkStatus.HOLIDAY_WORK,
}

STATE_BY_MISSING = {
    WorkStatus.ABSENT: SessionState.MISSING_CHECKIN,
    WorkStatus.CHECKIN_MISSING: SessionState.MISSING_CHECKIN,
    WorkStatus.CHECKOUT_MISSING: SessionState.MISSING_CHECKOUT,
}

MANUAL_CORRECTION_NOTE = "manual punch correction"


@dataclass(frozen=True)
class DayComputation:
    """Unrounded result of one (user, date) pass through the pipeline."""

    user_id: int
    work_date: date
    state: SessionState
    status: WorkStatus
    classification: DayClassification
    check_in_time: Optional[time] = None
    check_out_time: Optional[time] = None
    hours: CompensationHours = CompensationHours()
    night_hours: Decimal = ZERO
    break_minutes: int = 0
    had_dinner: bool = False
    method: Optional[CalculationMethod] = None
    notes: Tuple[str, ...] = ()


def require_session(bounds: PunchBounds, policy: PolicyConfig) -> WorkSession:
    missing = bounds.missing
    if missing is not None:
        raise IncompletePunchData(f"Punch data incomplete: {missing.value}", missing=missing.value)

    session = build_session(bounds.first_check_in, bounds.last_check_out)
    if session.span_minutes <= 0:
        raise InvalidTimeOrdering("Check-out equals check-in")
    if session.spans_midnight and session.span_minutes > policy.max_shift_minutes:
        raise InvalidTimeOrdering(
            f"Check-out {session.check_out} before check-in {session.check_in} "
            f"implies a {session.span_minutes / 60:.1f}h overnight shift"
        )
    return session


class WorkDayCalculator:
    """Pure pipeline: punches -> session -> breaks/night -> policy.

    The only side inputs are the day classifier (for the second date of an
    overnight session) and the values passed in; nothing is written here.
    """

    def __init__(self, classifier: DayClassifier, *, engine: Optional[CompensationPolicyEngine] = None):
        self._splitter = MidnightSplitResolver(classifier)
        self._engine = engine or CompensationPolicyEngine()

    def calculate(
        self,
        *,
        user_id: int,
        work_date: date,
        punches: Iterable[PunchEvent],
        classification: DayClassification,
        leave: Optional[LeaveOverride],
        policy: PolicyConfig,
    ) -> DayComputation:
        if leave is not None:
            return DayComputation(
                user_id=user_id,
                work_date=work_date,
                state=SessionState.LEAVE_OVERRIDE,
                status=WorkStatus.LEAVE,
                classification=classification,
                hours=CompensationHours(basic=leave.hours),
                notes=(leave.note,),
            )

        bounds = aggregate_punches(punches, max_shift_minutes=policy.max_shift_minutes)
        manual = (MANUAL_CORRECTION_NOTE,) if bounds.is_manual else ()
        try:
            session = require_session(bounds, policy)
        except IncompletePunchData:
            status = bounds.missing
            return DayComputation(
                user_id=user_id,
                work_date=work_date,
                state=STATE_BY_MISSING[status],
                status=status,
                classification=classification,
                check_in_time=bounds.first_check_in,
                check_out_time=bounds.last_check_out,
                had_dinner=bounds.had_dinner,
                notes=manual,
            )
        except InvalidTimeOrdering as exc:
            logger.warning("Anomalous punches for user=%s date=%s: %s", user_id, work_date, exc)
            return DayComputation(
                user_id=user_id,
                work_date=work_date,
                state=SessionState.ANOMALY,
                status=WorkStatus.ANOMALY,
                classification=classification,
                check_in_time=bounds.first_check_in,
                check_out_time=bounds.last_check_out,
                had_dinner=bounds.had_dinner,
                notes=(str(exc),) + manual,
            )

        partials = self._splitter.resolve(work_date, session, classification=classification)
        dinner_span = session.span_minutes if session.spans_midnight else None
        worked = tuple(
            WorkedPartial(
                partial=p,
                breaks=calculate_breaks(
                    p.start_minute,
                    p.end_minute,
                    had_dinner=bounds.had_dinner and p.holds_check_out,
                    policy=policy,
                    dinner_span_minutes=dinner_span if p.holds_check_out else None,
                ),
            )
            for p in partials
        )

        night = session_night_hours(session.check_in, session.check_out)
        evaluation = self._engine.evaluate(worked, night_hours=night, policy=policy)

        risk = assess_session_risk(
            total_hours=sum((w.net_hours for w in worked), ZERO),
            night_hours=night,
            day_types=[w.day_type for w in worked],
            warnings=evaluation.warnings,
        )
        notes = [n for n in (evaluation.note, risk.as_note()) if n]
        if risk.as_note() is None:
            notes.extend(evaluation.warnings)
        notes.extend(manual)

        return DayComputation(
            user_id=user_id,
            work_date=work_date,
            state=SessionState.COMPLETE,
            status=STATUS_BY_DAY_TYPE[evaluation.governing_day_type],
            classification=classification,
            check_in_time=session.check_in,
            check_out_time=session.check_out,
            hours=evaluation.compensation.hours(),
            night_hours=night,
            break_minutes=sum(w.breaks.break_minutes for w in worked),
            had_dinner=bounds.had_dinner,
            method=evaluation.method,
            notes=tuple(notes),
        )
