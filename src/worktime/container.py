from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .calendars.classifier import DayClassifier
from .calendars.mysql_holiday_repository import MySQLHolidayRepository
from .calendars.repository import HolidayCalendar
from .common.datetime_utils import now_local
from .core.constants import DEFAULT_LOCK_TIMEOUT_SECONDS
from .core.exceptions import ValidationError
from .database.connection import DBConfig, DatabaseConnection
from .leave.mysql_leave_repository import MySQLLeaveGrantRepository
from .leave.repository import LeaveGrantRepository
from .leave.resolver import LeaveResolver
from .policies.mysql_policy_repository import MySQLPolicyRepository
from .policies.repository import PolicyRepository
from .policies.service import PolicyService
from .punches.mysql_punch_repository import MySQLPunchRepository
from .punches.repository import PunchRepository
from .punches.service import PunchService
from .reports.service import PeriodReportService
from .summaries.locks import InProcessKeyLocks, KeyLocks, MySQLAdvisoryLocks
from .summaries.mysql_summary_repository import MySQLSummaryRepository
from .summaries.orchestrator import RecalculationOrchestrator
from .summaries.repository import SummaryRepository
from .summaries.service import SummaryService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    punches_repo: PunchRepository
    summaries_repo: SummaryRepository
    holidays_repo: HolidayCalendar
    leave_repo: LeaveGrantRepository
    policies_repo: PolicyRepository

    classifier: DayClassifier
    orchestrator: RecalculationOrchestrator
    punch_service: PunchService
    summary_service: SummaryService
    report_service: PeriodReportService


def assemble(
    *,
    punches_repo: PunchRepository,
    summaries_repo: SummaryRepository,
    holidays_repo: HolidayCalendar,
    leave_repo: LeaveGrantRepository,
    policies_repo: PolicyRepository,
    locks: Optional[KeyLocks] = None,
    conn: Optional[DatabaseConnection] = None,
    clock: Callable[[], datetime] = now_local,
) -> Container:
    """Wire services over the given repositories (MySQL ones or test fakes)."""

    locks = locks or InProcessKeyLocks()
    classifier = DayClassifier(holidays_repo)
    orchestrator = RecalculationOrchestrator(
        punches_repo,
        summaries_repo,
        classifier,
        LeaveResolver(leave_repo),
        PolicyService(policies_repo),
        locks=locks,
        clock=clock,
    )

    return Container(
        conn=conn,
        punches_repo=punches_repo,
        summaries_repo=summaries_repo,
        holidays_repo=holidays_repo,
        leave_repo=leave_repo,
        policies_repo=policies_repo,
        classifier=classifier,
        orchestrator=orchestrator,
        punch_service=PunchService(punches_repo, orchestrator),
        summary_service=SummaryService(summaries_repo, classifier, locks=locks, clock=clock),
        report_service=PeriodReportService(summaries_repo),
    )


def build_locks(
    backend: str,
    conn: DatabaseConnection,
    *,
    timeout: int = DEFAULT_LOCK_TIMEOUT_SECONDS,
) -> KeyLocks:
    if backend == "process":
        return InProcessKeyLocks(timeout=timeout)
    if backend == "mysql":
        return MySQLAdvisoryLocks(conn, timeout=timeout)
    raise ValidationError(f"Unknown lock backend: {backend!r}")


def build_container(
    *,
    db_config: dict,
    lock_backend: str = "process",
    lock_timeout: int = DEFAULT_LOCK_TIMEOUT_SECONDS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        punches_repo=MySQLPunchRepository(conn),
        summaries_repo=MySQLSummaryRepository(conn),
        holidays_repo=MySQLHolidayRepository(conn),
        leave_repo=MySQLLeaveGrantRepository(conn),
        policies_repo=MySQLPolicyRepository(conn),
        locks=build_locks(lock_backend, conn, timeout=lock_timeout),
        conn=conn,
    )
