from __future__ import annotations

from datetime import time
from decimal import Decimal

from ..common.datetime_utils import minute_of_day, minutes_to_hours
from ..core.constants import MINUTES_PER_DAY, NIGHT_END_MINUTE, NIGHT_START_MINUTE


def night_minutes(start_minute: int, end_minute: int) -> int:
    """Minutes of [start_minute, end_minute) inside the 22:00-06:00 windows.

    Minutes are counted from midnight of the check-in day, so an overnight
    session ends past 1440. Each night window is [22:00 of day k, 06:00 of
    day k+1); the windows are disjoint, so contributions simply add up.
    """

    if end_minute <= start_minute:
        return 0

    total = 0
    first_day = start_minute // MINUTES_PER_DAY - 1
    last_day = end_minute // MINUTES_PER_DAY
    for day in range(first_day, last_day + 1):
        window_start = day * MINUTES_PER_DAY + NIGHT_START_MINUTE
        window_end = (day + 1) * MINUTES_PER_DAY + NIGHT_END_MINUTE
        overlap = min(end_minute, window_end) - max(start_minute, window_start)
        total += max(0, overlap)
    return total


def night_hours(check_in: time, check_out: time) -> Decimal:
    """Night hours of a punch pair; a check-out earlier than the check-in is
    taken to be on the next day."""

    start = minute_of_day(check_in)
    end = minute_of_day(check_out)
    if end < start:
        end += MINUTES_PER_DAY
    return minutes_to_hours(night_minutes(start, end))
