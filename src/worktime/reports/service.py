from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import round_hours
from ..common.validators import require_date_range
from ..core.constants import MAX_RANGE_DAYS
from ..summaries.repository import SummaryRepository

TOTAL_FIELDS = (
    "basic_hours",
    "overtime_hours",
    "night_hours",
    "substitute_leave_hours",
    "compensatory_leave_hours",
)

REPORT_COLUMNS = [
    "work_date",
    "user_id",
    "day_type",
    "check_in",
    "check_out",
    "status",
    *TOTAL_FIELDS,
    "break_minutes",
    "method",
    "auto_calculated",
    "notes",
]


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


class PeriodReportService:
    def __init__(self, summaries: SummaryRepository):
        self._summaries = summaries

    def build_report(self, *, start: date, end: date, user_id: Optional[int] = None) -> ReportData:
        require_date_range(start, end, max_days=MAX_RANGE_DAYS)
        stored = self._summaries.list_for_range(start_date=start, end_date=end, user_id=user_id)

        totals: dict[int, dict] = {}
        out_rows: list[dict] = []

        for s in stored:
            out_rows.append(
                {
                    "work_date": s.work_date.strftime("%Y-%m-%d"),
                    "user_id": s.user_id,
                    "day_type": s.day_type.value,
                    "check_in": s.check_in_time.strftime("%H:%M") if s.check_in_time else "-",
                    "check_out": s.check_out_time.strftime("%H:%M") if s.check_out_time else "-",
                    "status": s.work_status_tag.value,
                    "basic_hours": s.basic_hours,
                    "overtime_hours": s.overtime_hours,
                    "night_hours": s.night_hours,
                    "substitute_leave_hours": s.substitute_leave_hours,
                    "compensatory_leave_hours": s.compensatory_leave_hours,
                    "break_minutes": s.break_minutes,
                    "method": s.calculation_method.value if s.calculation_method else "-",
                    "auto_calculated": s.auto_calculated,
                    "notes": s.notes or "",
                }
            )

            t = totals.get(s.user_id)
            if not t:
                t = {"user_id": s.user_id, "days": 0, "incomplete_days": 0}
                t.update({f: Decimal("0") for f in TOTAL_FIELDS})
                totals[s.user_id] = t
            t["days"] += 1
            if s.is_incomplete:
                t["incomplete_days"] += 1
            for f in TOTAL_FIELDS:
                # Stored figures are already rounded; sum them exactly.
                t[f] += Decimal(str(getattr(s, f)))

        summary = []
        for t in totals.values():
            summary.append({**t, **{f: round_hours(t[f]) for f in TOTAL_FIELDS}})

        summary.sort(key=lambda x: x["user_id"])
        return ReportData(rows=out_rows, summary=summary)
