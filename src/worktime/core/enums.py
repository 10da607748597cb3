from __future__ import annotations

from enum import Enum


class DayType(str, Enum):
    """Rate class of a calendar day."""

    WEEKDAY = "weekday"
    SATURDAY = "saturday"
    SUNDAY_OR_HOLIDAY = "sunday_or_holiday"


class PunchKind(str, Enum):
    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"


class WorkStatus(str, Enum):
    """Status tag persisted on a daily summary row."""

    NORMAL = "normal"
    SATURDAY_WORK = "saturday_work"
    HOLIDAY_WORK = "holiday_work"
    LEAVE = "leave"
    CHECKIN_MISSING = "checkin_missing"
    CHECKOUT_MISSING = "checkout_missing"
    ANOMALY = "anomaly"
    ABSENT = "absent"


class SessionState(str, Enum):
    """Per (user, date) state reached by the recalculation pipeline."""

    MISSING_CHECKIN = "missing_checkin"
    MISSING_CHECKOUT = "missing_checkout"
    LEAVE_OVERRIDE = "leave_override"
    ANOMALY = "anomaly"
    COMPLETE = "complete"


class CalculationMethod(str, Enum):
    SINGLE_DAY = "single_day"
    SPLIT_BY_DATE = "split_by_date"
    COMPLEX_CALCULATION = "complex_calculation"


class RequestStatus(str, Enum):
    """Approval state of a leave grant."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
