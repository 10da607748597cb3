from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time, timedelta
from decimal import Decimal
from typing import Tuple

from ..calendars.classifier import DayClassifier
from ..calendars.model import DayClassification
from ..common.datetime_utils import minute_of_day
from ..core.constants import MINUTES_PER_DAY
from ..core.enums import DayType
from .breaks import BreakBreakdown


@dataclass(frozen=True)
class WorkSession:
    check_in: time
    check_out: time
    spans_midnight: bool

    @property
    def start_minute(self) -> int:
        return minute_of_day(self.check_in)

    @property
    def end_minute(self) -> int:
        """End on the check-in day's timeline (past 1440 when overnight)."""
        end = minute_of_day(self.check_out)
        return end + MINUTES_PER_DAY if self.spans_midnight else end

    @property
    def span_minutes(self) -> int:
        return self.end_minute - self.start_minute


def build_session(check_in: time, check_out: time) -> WorkSession:
    return WorkSession(check_in=check_in, check_out=check_out, spans_midnight=check_out < check_in)


@dataclass(frozen=True)
class PartialSession:
    """A same-calendar-day stretch of a session, in minutes of its own day."""

    work_date: date
    start_minute: int
    end_minute: int
    classification: DayClassification
    holds_check_out: bool

    @property
    def day_type(self) -> DayType:
        return self.classification.day_type

    @property
    def raw_minutes(self) -> int:
        return self.end_minute - self.start_minute


@dataclass(frozen=True)
class WorkedPartial:
    """A partial session after break deduction."""

    partial: PartialSession
    breaks: BreakBreakdown

    @property
    def day_type(self) -> DayType:
        return self.partial.day_type

    @property
    def net_hours(self) -> Decimal:
        return self.breaks.net_hours


class MidnightSplitResolver:
    """Splits a session that crosses midnight into two same-day partials.

    Each partial is classified on its own date, so a Saturday night shift
    ending on Sunday morning yields a ``saturday`` and a ``sunday_or_holiday``
    stretch.
    """

    def __init__(self, classifier: DayClassifier):
        self._classifier = classifier

    def resolve(
        self,
        work_date: date,
        session: WorkSession,
        *,
        classification: DayClassification | None = None,
    ) -> Tuple[PartialSession, ...]:
        first_class = classification or self._classifier.classify(work_date)

        if not session.spans_midnight:
            return (
                PartialSession(
                    work_date=work_date,
                    start_minute=session.start_minute,
                    end_minute=minute_of_day(session.check_out),
                    classification=first_class,
                    holds_check_out=True,
                ),
            )

        next_date = work_date + timedelta(days=1)
        second_class = self._classifier.classify(next_date)
        return (
            PartialSession(
                work_date=work_date,
                start_minute=session.start_minute,
                end_minute=MINUTES_PER_DAY,
                classification=first_class,
                holds_check_out=False,
            ),
            PartialSession(
                work_date=next_date,
                start_minute=0,
                end_minute=minute_of_day(session.check_out),
                classification=second_class,
                holds_check_out=True,
            ),
        )
