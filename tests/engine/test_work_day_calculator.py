from decimal import Decimal

import pytest

from worktime.calendars.classifier import DayClassifier
from worktime.calendars.static_calendar import StaticHolidayCalendar
from worktime.core.enums import CalculationMethod, PunchKind, SessionState, WorkStatus
from worktime.engine.calculator import WorkDayCalculator
from worktime.leave.model import LeaveOverride
from worktime.policies.model import PolicyConfig
from worktime.punches.model import PunchEvent
from worktime_testkit import FRIDAY, SATURDAY, hm

POLICY = PolicyConfig()
USER = 7


def punch(day, at, kind, *, had_dinner=False):
    return PunchEvent(user_id=USER, work_date=day, time_of_day=hm(at), kind=kind, had_dinner=had_dinner)


def shift(day, start, end, *, had_dinner=False):
    return [punch(day, start, PunchKind.CHECK_IN), punch(day, end, PunchKind.CHECK_OUT, had_dinner=had_dinner)]


@pytest.fixture
def classifier():
    return DayClassifier(StaticHolidayCalendar())


def calculate(classifier, day, punches, *, leave=None):
    return WorkDayCalculator(classifier).calculate(
        user_id=USER,
        work_date=day,
        punches=punches,
        classification=classifier.classify(day),
        leave=leave,
        policy=POLICY,
    )


def test_weekday_with_overtime(classifier):
    comp = calculate(classifier, FRIDAY, shift(FRIDAY, "09:00", "19:00"))
    assert comp.state == SessionState.COMPLETE
    assert comp.status == WorkStatus.NORMAL
    assert comp.hours.basic == Decimal(8)
    assert comp.hours.overtime == Decimal(1)
    assert comp.break_minutes == 60
    assert comp.night_hours == 0
    assert comp.method == CalculationMethod.SINGLE_DAY
    assert comp.notes == ()


def test_saturday_ten_hours(classifier):
    comp = calculate(classifier, SATURDAY, shift(SATURDAY, "08:00", "19:00"))
    assert comp.status == WorkStatus.SATURDAY_WORK
    assert comp.hours.basic == Decimal(10)
    assert comp.hours.substitute_leave == Decimal(11)
    assert comp.hours.overtime == 0


def test_friday_night_into_saturday(classifier):
    comp = calculate(classifier, FRIDAY, shift(FRIDAY, "20:00", "06:00"))
    assert comp.state == SessionState.COMPLETE
    assert comp.method == CalculationMethod.SPLIT_BY_DATE
    assert comp.status == WorkStatus.SATURDAY_WORK
    assert comp.hours.basic == Decimal(10)
    assert comp.hours.overtime == 0
    assert comp.hours.substitute_leave == Decimal(6)
    assert comp.night_hours == Decimal(8)
    assert comp.break_minutes == 0
    assert any(n.startswith("risk=critical") for n in comp.notes)


def test_dinner_on_overnight_checkout(classifier):
    comp = calculate(classifier, FRIDAY, shift(FRIDAY, "14:00", "02:00", had_dinner=True))
    # Friday 10h raw - 1h meal, Saturday 2h raw - 1h dinner.
    assert comp.break_minutes == 120
    assert comp.hours.basic == Decimal(9)
    assert comp.hours.overtime == Decimal(1)
    assert comp.hours.substitute_leave == Decimal(1)
    assert comp.night_hours == Decimal(4)
    assert comp.had_dinner


@pytest.mark.parametrize(
    "punches, status, state",
    [
        ([], WorkStatus.ABSENT, SessionState.MISSING_CHECKIN),
        ([punch(FRIDAY, "09:00", PunchKind.CHECK_IN)], WorkStatus.CHECKOUT_MISSING, SessionState.MISSING_CHECKOUT),
        ([punch(FRIDAY, "18:00", PunchKind.CHECK_OUT)], WorkStatus.CHECKIN_MISSING, SessionState.MISSING_CHECKIN),
    ],
)
def test_incomplete_punches_have_zero_hours(classifier, punches, status, state):
    comp = calculate(classifier, FRIDAY, punches)
    assert comp.status == status
    assert comp.state == state
    assert comp.hours.basic == 0
    assert comp.hours.overtime == 0
    assert comp.night_hours == 0


@pytest.mark.parametrize("start, end", [("09:00", "09:00"), ("10:00", "08:00")])
def test_anomalous_sessions(classifier, start, end):
    comp = calculate(classifier, FRIDAY, shift(FRIDAY, start, end))
    assert comp.status == WorkStatus.ANOMALY
    assert comp.state == SessionState.ANOMALY
    assert comp.hours.basic == 0
    assert comp.notes


def test_leave_replaces_punches(classifier):
    leave = LeaveOverride(grant_id=3, leave_kind="annual", hours=Decimal(8), full_day=True)
    comp = calculate(classifier, FRIDAY, shift(FRIDAY, "09:00", "19:00"), leave=leave)
    assert comp.state == SessionState.LEAVE_OVERRIDE
    assert comp.status == WorkStatus.LEAVE
    assert comp.hours.basic == Decimal(8)
    assert comp.hours.overtime == 0
    assert comp.notes == ("leave:annual (full day, grant #3)",)


def test_stray_morning_check_out_does_not_hide_the_day(classifier):
    punches = [
        punch(FRIDAY, "09:00", PunchKind.CHECK_IN),
        punch(FRIDAY, "08:00", PunchKind.CHECK_OUT),
        punch(FRIDAY, "18:00", PunchKind.CHECK_OUT),
    ]
    comp = calculate(classifier, FRIDAY, punches)
    assert comp.state == SessionState.COMPLETE
    assert comp.status == WorkStatus.NORMAL
    assert comp.hours.basic == Decimal(8)
    assert comp.hours.overtime == Decimal(0)


def test_manual_correction_is_noted(classifier):
    corrected = PunchEvent(
        user_id=USER, work_date=FRIDAY, time_of_day=hm("19:00"), kind=PunchKind.CHECK_OUT, is_manual=True
    )
    comp = calculate(classifier, FRIDAY, [punch(FRIDAY, "09:00", PunchKind.CHECK_IN), corrected])
    assert comp.status == WorkStatus.NORMAL
    assert "manual punch correction" in comp.notes

    incomplete = calculate(classifier, FRIDAY, [corrected])
    assert incomplete.status == WorkStatus.CHECKIN_MISSING
    assert incomplete.notes == ("manual punch correction",)
