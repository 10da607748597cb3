from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import LookupUnavailable
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, translate_errors
from .model import PolicyConfig
from .repository import PolicyRepository


class MySQLPolicyRepository(PolicyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_effective(self, as_of: date) -> Optional[PolicyConfig]:
        with translate_errors(LookupUnavailable, "Policy lookup"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT version, effective_from,
                           overtime_threshold_hours, saturday_rate, sunday_or_holiday_rate, night_rate,
                           meal_break_minutes, meal_break_trigger_hours,
                           dinner_break_minutes, dinner_break_trigger_hours,
                           sunday_overtime_rate, leave_base_hours, full_day_leave_hours, max_shift_hours
                    FROM work_policies
                    WHERE effective_from <= %s
                    ORDER BY effective_from DESC
                    LIMIT 1
                    """,
                    (as_of,),
                )
                r = fetchone(cur)
        if not r:
            return None
        return PolicyConfig.from_row(r)
