from datetime import time
from decimal import Decimal

import pytest

from worktime.common.datetime_utils import minutes_to_hours
from worktime.engine.night import night_hours, night_minutes


@pytest.mark.parametrize(
    "check_in, check_out, expected",
    [
        (time(9, 0), time(17, 0), Decimal("0")),
        (time(20, 0), time(6, 0), Decimal("8")),
        (time(22, 0), time(6, 0), Decimal("8")),
        (time(21, 0), time(23, 0), Decimal("1")),
        (time(5, 0), time(7, 0), Decimal("1")),
        (time(23, 0), time(23, 30), Decimal("0.5")),
        (time(4, 0), time(23, 0), Decimal("3")),
    ],
)
def test_night_hours_overlap(check_in, check_out, expected):
    assert night_hours(check_in, check_out) == expected


def test_night_minutes_span_two_windows():
    # 05:00 day 0 -> 07:00 day 1: one hour of each window plus 22:00-06:00.
    assert night_minutes(5 * 60, 31 * 60) == 60 + 480


def test_empty_interval_has_no_night():
    assert night_minutes(600, 600) == 0
    assert night_minutes(700, 600) == 0


def test_shift_ending_before_window_close():
    # 22:00 -> 05:00 is night on both sides of midnight.
    evening = minutes_to_hours(night_minutes(22 * 60, 24 * 60))
    morning = minutes_to_hours(night_minutes(0, 5 * 60))
    assert evening + morning == Decimal(7)
    assert night_hours(time(22, 0), time(5, 0)) == Decimal(7)
