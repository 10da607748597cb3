from __future__ import annotations

from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterator, Union

from ..core.exceptions import ValidationError

ONE_DECIMAL = Decimal("0.1")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_time_of_day(value: str) -> time:
    """Parse HH:MM or HH:MM:SS into a time of day."""
    v = (value or "").strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time (HH:MM): {value!r}")


def minute_of_day(value: time) -> int:
    """Minutes since midnight. Seconds are truncated: punches are minute-grained."""
    return value.hour * 60 + value.minute


def minutes_to_hours(minutes: Union[int, Decimal]) -> Decimal:
    return Decimal(minutes) / Decimal(60)


def round_hours(value: Decimal) -> float:
    """Round half up to one decimal (9.25 -> 9.3)."""
    return float(Decimal(value).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))


def iter_dates(start: date, end: date) -> Iterator[date]:
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
