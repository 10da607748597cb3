from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import CalculationMethod, DayType, WorkStatus
from ..core.exceptions import StoreUnavailable
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone, normalize_mysql_time, translate_errors
from .model import DaySummary
from .repository import SummaryRepository

COLUMNS = (
    "user_id",
    "work_date",
    "check_in_time",
    "check_out_time",
    "basic_hours",
    "overtime_hours",
    "night_hours",
    "substitute_leave_hours",
    "compensatory_leave_hours",
    "break_minutes",
    "had_dinner",
    "work_status_tag",
    "day_type",
    "is_holiday",
    "holiday_name",
    "calculation_method",
    "notes",
    "auto_calculated",
    "calculated_at",
)

SELECT_SQL = f"SELECT {', '.join(COLUMNS)} FROM daily_work_summary"

UPSERT_SQL = f"""
    INSERT INTO daily_work_summary({', '.join(COLUMNS)})
    VALUES({', '.join(['%s'] * len(COLUMNS))})
    ON DUPLICATE KEY UPDATE
    {', '.join(f'{c}=VALUES({c})' for c in COLUMNS if c not in ('user_id', 'work_date'))}
"""


def _to_summary(r: dict) -> DaySummary:
    method = r.get("calculation_method")
    return DaySummary(
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in_time=normalize_mysql_time(r.get("check_in_time")),
        check_out_time=normalize_mysql_time(r.get("check_out_time")),
        basic_hours=as_float(r.get("basic_hours")),
        overtime_hours=as_float(r.get("overtime_hours")),
        night_hours=as_float(r.get("night_hours")),
        substitute_leave_hours=as_float(r.get("substitute_leave_hours")),
        compensatory_leave_hours=as_float(r.get("compensatory_leave_hours")),
        work_status_tag=WorkStatus(r["work_status_tag"]),
        is_holiday=bool(r.get("is_holiday")),
        auto_calculated=bool(r.get("auto_calculated")),
        calculated_at=r["calculated_at"],
        day_type=DayType(r["day_type"]),
        holiday_name=r.get("holiday_name"),
        break_minutes=int(r.get("break_minutes") or 0),
        had_dinner=bool(r.get("had_dinner")),
        calculation_method=CalculationMethod(method) if method else None,
        notes=r.get("notes"),
    )


class MySQLSummaryRepository(SummaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, user_id: int, work_date: date) -> Optional[DaySummary]:
        with translate_errors(StoreUnavailable, "Summary read"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"{SELECT_SQL} WHERE user_id=%s AND work_date=%s",
                    (int(user_id), work_date),
                )
                r = fetchone(cur)
                return _to_summary(r) if r else None

    def upsert(self, summary: DaySummary) -> None:
        values = (
            summary.user_id,
            summary.work_date,
            summary.check_in_time,
            summary.check_out_time,
            summary.basic_hours,
            summary.overtime_hours,
            summary.night_hours,
            summary.substitute_leave_hours,
            summary.compensatory_leave_hours,
            summary.break_minutes,
            int(summary.had_dinner),
            summary.work_status_tag.value,
            summary.day_type.value,
            int(summary.is_holiday),
            summary.holiday_name,
            summary.calculation_method.value if summary.calculation_method else None,
            summary.notes,
            int(summary.auto_calculated),
            summary.calculated_at,
        )
        with translate_errors(StoreUnavailable, "Summary upsert"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(UPSERT_SQL, values)

    def list_for_range(
        self,
        *,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> Sequence[DaySummary]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        where = " AND ".join(clauses)
        with translate_errors(StoreUnavailable, "Summary read"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"{SELECT_SQL} WHERE {where} ORDER BY work_date ASC, user_id ASC",
                    tuple(params),
                )
                return [_to_summary(r) for r in fetchall(cur)]
