from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import DaySummary


class SummaryRepository(Protocol):
    def get(self, user_id: int, work_date: date) -> Optional[DaySummary]:
        raise NotImplementedError

    def upsert(self, summary: DaySummary) -> None:
        """Insert or update the (user_id, work_date) row in one atomic statement."""

        raise NotImplementedError

    def list_for_range(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[DaySummary]:
        raise NotImplementedError
