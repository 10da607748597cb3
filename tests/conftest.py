from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

import pytest

from worktime.container import Container, assemble
from worktime.policies.model import PolicyConfig
from worktime_testkit import (
    FakeLeaveRepo,
    FakePolicyRepo,
    FakePunchRepo,
    FakeSummaryRepo,
    FixedClock,
    FlakyHolidayCalendar,
)


@dataclass
class World:
    punches: FakePunchRepo
    summaries: FakeSummaryRepo
    holidays: FlakyHolidayCalendar
    leave: FakeLeaveRepo
    policies: FakePolicyRepo
    clock: FixedClock
    container: Container


@pytest.fixture
def policy() -> PolicyConfig:
    return PolicyConfig(effective_from=date(2026, 1, 1), version="2026")


@pytest.fixture
def world(policy) -> World:
    punches = FakePunchRepo()
    summaries = FakeSummaryRepo()
    holidays = FlakyHolidayCalendar()
    leave = FakeLeaveRepo()
    policies = FakePolicyRepo(policy)
    clock = FixedClock(datetime(2026, 10, 20, 8, 0, 0))
    container = assemble(
        punches_repo=punches,
        summaries_repo=summaries,
        holidays_repo=holidays,
        leave_repo=leave,
        policies_repo=policies,
        clock=clock,
    )
    return World(punches, summaries, holidays, leave, policies, clock, container)
