from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import RequestStatus
from ..core.exceptions import LookupUnavailable
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, translate_errors
from .model import LeaveGrant
from .repository import LeaveGrantRepository


class MySQLLeaveGrantRepository(LeaveGrantRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_for_user_and_date(self, user_id: int, day: date) -> Sequence[LeaveGrant]:
        with translate_errors(LookupUnavailable, "Leave lookup"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT grant_id, user_id, start_date, end_date, leave_kind, hours, full_day, status
                    FROM leave_grants
                    WHERE user_id=%s AND start_date <= %s AND end_date >= %s
                    ORDER BY grant_id ASC
                    """,
                    (int(user_id), day, day),
                )
                rows = fetchall(cur)

        return [
            LeaveGrant(
                grant_id=int(r["grant_id"]),
                user_id=int(r["user_id"]),
                start_date=r["start_date"],
                end_date=r["end_date"],
                leave_kind=r["leave_kind"],
                full_day=bool(r["full_day"]),
                status=RequestStatus(r["status"]),
                hours=float(r["hours"]) if r.get("hours") is not None else None,
            )
            for r in rows
        ]
