from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import PunchKind
from .model import PunchEvent


class PunchRepository(Protocol):
    def list_for_user_and_date(self, user_id: int, work_date: date) -> Sequence[PunchEvent]:
        raise NotImplementedError

    def get_by_id(self, punch_id: int) -> Optional[PunchEvent]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        work_date: date,
        time_of_day: time,
        kind: PunchKind,
        had_dinner: bool = False,
        is_manual: bool = False,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        punch_id: int,
        work_date: date,
        time_of_day: time,
        had_dinner: bool,
    ) -> bool:
        """Manual correction; marks the punch as manual."""

        raise NotImplementedError

    def delete(self, punch_id: int) -> bool:
        raise NotImplementedError
