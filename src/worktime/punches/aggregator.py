from __future__ import annotations

from datetime import time
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import minute_of_day
from ..core.constants import DEFAULT_MAX_SHIFT_HOURS, MINUTES_PER_DAY
from ..core.enums import PunchKind
from ..core.exceptions import ValidationError
from .model import PunchBounds, PunchEvent

DEFAULT_MAX_SHIFT_MINUTES = int(DEFAULT_MAX_SHIFT_HOURS * 60)


def _overnight_span(check_in: time, check_out: time) -> int:
    return minute_of_day(check_out) + MINUTES_PER_DAY - minute_of_day(check_in)


def _pick_check_out(
    check_outs: Sequence[PunchEvent],
    first_check_in: Optional[time],
    max_shift_minutes: int,
) -> PunchEvent:
    if first_check_in is None:
        return max(check_outs, key=lambda p: p.time_of_day)

    # A check-out earlier in the day than the first check-in closes an
    # overnight session only when the resulting shift is plausible.
    overnight = [
        p for p in check_outs
        if p.time_of_day < first_check_in and _overnight_span(first_check_in, p.time_of_day) <= max_shift_minutes
    ]
    if overnight:
        return max(overnight, key=lambda p: p.time_of_day)

    same_day = [p for p in check_outs if p.time_of_day >= first_check_in]
    if same_day:
        return max(same_day, key=lambda p: p.time_of_day)

    # Only implausible early check-outs: keep the latest, tagged as an anomaly downstream.
    return max(check_outs, key=lambda p: p.time_of_day)


def aggregate_punches(
    punches: Iterable[PunchEvent],
    *,
    max_shift_minutes: int = DEFAULT_MAX_SHIFT_MINUTES,
) -> PunchBounds:
    """Reduce one (user, date)'s punches to the earliest check-in and the
    latest check-out, chosen independently of each other."""

    items: Sequence[PunchEvent] = list(punches)
    if items:
        key = (items[0].user_id, items[0].work_date)
        for p in items[1:]:
            if (p.user_id, p.work_date) != key:
                raise ValidationError("Punches of different users or dates cannot be aggregated")

    check_ins = [p for p in items if p.kind == PunchKind.CHECK_IN]
    check_outs = [p for p in items if p.kind == PunchKind.CHECK_OUT]

    first_in = min(check_ins, key=lambda p: p.time_of_day) if check_ins else None
    first_check_in = first_in.time_of_day if first_in else None

    last_out = _pick_check_out(check_outs, first_check_in, max_shift_minutes) if check_outs else None

    return PunchBounds(
        first_check_in=first_check_in,
        last_check_out=last_out.time_of_day if last_out else None,
        had_dinner=bool(last_out.had_dinner) if last_out else False,
        is_manual=any(p.is_manual for p in (first_in, last_out) if p is not None),
    )
