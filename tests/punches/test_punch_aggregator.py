from datetime import time

import pytest

from worktime.core.enums import PunchKind, WorkStatus
from worktime.core.exceptions import ValidationError
from worktime.punches.aggregator import aggregate_punches
from worktime.punches.model import PunchEvent
from worktime_testkit import FRIDAY, SATURDAY, hm


def p(at, kind, *, user_id=1, day=FRIDAY, had_dinner=False):
    return PunchEvent(user_id=user_id, work_date=day, time_of_day=hm(at), kind=kind, had_dinner=had_dinner)


def test_earliest_check_in_and_latest_check_out():
    bounds = aggregate_punches(
        [
            p("09:00", PunchKind.CHECK_IN),
            p("17:00", PunchKind.CHECK_OUT),
            p("08:55", PunchKind.CHECK_IN),
            p("18:00", PunchKind.CHECK_OUT, had_dinner=True),
        ]
    )
    assert bounds.first_check_in == time(8, 55)
    assert bounds.last_check_out == time(18, 0)
    assert bounds.had_dinner
    assert bounds.is_complete


def test_dinner_flag_follows_chosen_check_out():
    bounds = aggregate_punches(
        [
            p("09:00", PunchKind.CHECK_IN),
            p("17:00", PunchKind.CHECK_OUT, had_dinner=True),
            p("19:00", PunchKind.CHECK_OUT),
        ]
    )
    assert bounds.last_check_out == time(19, 0)
    assert not bounds.had_dinner


def test_after_midnight_check_out_is_latest():
    bounds = aggregate_punches(
        [
            p("20:00", PunchKind.CHECK_IN),
            p("21:00", PunchKind.CHECK_OUT),
            p("05:00", PunchKind.CHECK_OUT),
        ]
    )
    assert bounds.last_check_out == time(5, 0)


def test_missing_sides():
    assert aggregate_punches([]).missing == WorkStatus.ABSENT
    assert aggregate_punches([p("09:00", PunchKind.CHECK_IN)]).missing == WorkStatus.CHECKOUT_MISSING
    assert aggregate_punches([p("18:00", PunchKind.CHECK_OUT)]).missing == WorkStatus.CHECKIN_MISSING


def test_mixed_keys_rejected():
    with pytest.raises(ValidationError):
        aggregate_punches([p("09:00", PunchKind.CHECK_IN), p("18:00", PunchKind.CHECK_OUT, day=SATURDAY)])
    with pytest.raises(ValidationError):
        aggregate_punches([p("09:00", PunchKind.CHECK_IN), p("18:00", PunchKind.CHECK_OUT, user_id=2)])


def test_implausible_early_check_out_is_not_treated_as_overnight():
    # 09:00 -> 08:00 next day would be a 23h shift.
    bounds = aggregate_punches(
        [
            p("09:00", PunchKind.CHECK_IN),
            p("08:00", PunchKind.CHECK_OUT),
            p("18:00", PunchKind.CHECK_OUT),
        ]
    )
    assert bounds.last_check_out == time(18, 0)


def test_overnight_window_follows_max_shift():
    punches = [
        p("20:00", PunchKind.CHECK_IN),
        p("21:00", PunchKind.CHECK_OUT),
        p("05:00", PunchKind.CHECK_OUT),
    ]
    assert aggregate_punches(punches, max_shift_minutes=8 * 60).last_check_out == time(21, 0)
    assert aggregate_punches(punches, max_shift_minutes=9 * 60).last_check_out == time(5, 0)


def test_manual_flag_follows_chosen_punches():
    manual_out = PunchEvent(
        user_id=1, work_date=FRIDAY, time_of_day=hm("18:00"), kind=PunchKind.CHECK_OUT, is_manual=True
    )
    assert aggregate_punches([p("09:00", PunchKind.CHECK_IN), manual_out]).is_manual
    assert not aggregate_punches([p("09:00", PunchKind.CHECK_IN), p("18:00", PunchKind.CHECK_OUT)]).is_manual
