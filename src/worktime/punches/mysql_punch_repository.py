from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..core.enums import PunchKind
from ..core.exceptions import StoreUnavailable
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time, translate_errors
from .model import PunchEvent
from .repository import PunchRepository


def _to_punch(r: dict) -> PunchEvent:
    return PunchEvent(
        punch_id=int(r["punch_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        time_of_day=normalize_mysql_time(r["time_of_day"]),
        kind=PunchKind(r["kind"]),
        had_dinner=bool(r.get("had_dinner")),
        is_manual=bool(r.get("is_manual")),
    )


class MySQLPunchRepository(PunchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user_and_date(self, user_id: int, work_date: date) -> Sequence[PunchEvent]:
        with translate_errors(StoreUnavailable, "Punch read"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT punch_id, user_id, work_date, time_of_day, kind, had_dinner, is_manual
                    FROM punch_events
                    WHERE user_id=%s AND work_date=%s
                    ORDER BY time_of_day ASC, punch_id ASC
                    """,
                    (int(user_id), work_date),
                )
                return [_to_punch(r) for r in fetchall(cur)]

    def get_by_id(self, punch_id: int) -> Optional[PunchEvent]:
        with translate_errors(StoreUnavailable, "Punch read"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT punch_id, user_id, work_date, time_of_day, kind, had_dinner, is_manual
                    FROM punch_events
                    WHERE punch_id=%s
                    """,
                    (int(punch_id),),
                )
                r = fetchone(cur)
                return _to_punch(r) if r else None

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
        with translate_errors(StoreUnavailable, "Punch insert"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO punch_events(user_id, work_date, time_of_day, kind, had_dinner, is_manual)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (int(user_id), work_date, time_of_day, kind.value, int(had_dinner), int(is_manual)),
                )
                return int(cur.lastrowid)

    def update(
        self,
        *,
        punch_id: int,
        work_date: date,
        time_of_day: time,
        had_dinner: bool,
    ) -> bool:
        with translate_errors(StoreUnavailable, "Punch update"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE punch_events
                    SET work_date=%s, time_of_day=%s, had_dinner=%s, is_manual=1
                    WHERE punch_id=%s
                    """,
                    (work_date, time_of_day, int(had_dinner), int(punch_id)),
                )
                return cur.rowcount > 0

    def delete(self, punch_id: int) -> bool:
        with translate_errors(StoreUnavailable, "Punch delete"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM punch_events WHERE punch_id=%s", (int(punch_id),))
                return cur.rowcount > 0
