from __future__ import annotations

from datetime import date

from ..core.exceptions import LookupUnavailable
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, translate_errors
from .model import HolidayInfo
from .repository import HolidayCalendar


class MySQLHolidayRepository(HolidayCalendar):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def is_holiday(self, day: date) -> HolidayInfo:
        with translate_errors(LookupUnavailable, "Holiday lookup"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT name FROM holidays WHERE holiday_date=%s",
                    (day,),
                )
                r = fetchone(cur)
        if not r:
            return HolidayInfo(is_holiday=False)
        return HolidayInfo(is_holiday=True, name=r.get("name"))
