from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import LeaveGrant


class LeaveGrantRepository(Protocol):
    def find_for_user_and_date(self, user_id: int, day: date) -> Sequence[LeaveGrant]:
        """Every grant (any status) whose range covers ``day``.

        Raise LookupUnavailable when the source cannot be read.
        """

        raise NotImplementedError
