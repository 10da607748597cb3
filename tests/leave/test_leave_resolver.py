from datetime import timedelta
from decimal import Decimal

import pytest

from worktime.core.enums import RequestStatus
from worktime.core.exceptions import LookupUnavailable
from worktime.leave.model import LeaveGrant
from worktime.leave.resolver import LeaveResolver
from worktime.policies.model import PolicyConfig
from worktime_testkit import FRIDAY, FakeLeaveRepo

POLICY = PolicyConfig()


def grant(grant_id, *, full_day=True, hours=None, status=RequestStatus.APPROVED, user_id=1, kind="annual"):
    return LeaveGrant(
        grant_id=grant_id,
        user_id=user_id,
        start_date=FRIDAY - timedelta(days=1),
        end_date=FRIDAY + timedelta(days=1),
        leave_kind=kind,
        full_day=full_day,
        status=status,
        hours=hours,
    )


def resolve(*grants):
    repo = FakeLeaveRepo()
    repo.grants.extend(grants)
    return LeaveResolver(repo).resolve(1, FRIDAY, POLICY)


def test_no_grant_no_override():
    assert resolve() is None


def test_only_approved_grants_count():
    assert resolve(grant(1, status=RequestStatus.PENDING), grant(2, status=RequestStatus.REJECTED)) is None


def test_full_day_without_hours_uses_policy_length():
    override = resolve(grant(5))
    assert override.grant_id == 5
    assert override.hours == Decimal(8)
    assert override.full_day


def test_partial_grant_keeps_its_hours():
    override = resolve(grant(6, full_day=False, hours=4.0))
    assert override.hours == Decimal("4.0")
    assert not override.full_day


def test_full_day_beats_partial_then_largest_then_oldest():
    assert resolve(grant(9, full_day=False, hours=6.0), grant(10)).grant_id == 10
    assert resolve(grant(3, full_day=False, hours=2.0), grant(4, full_day=False, hours=4.0)).grant_id == 4
    assert resolve(grant(12), grant(11)).grant_id == 11


def test_unreachable_source_propagates():
    repo = FakeLeaveRepo()
    repo.fail = True
    with pytest.raises(LookupUnavailable):
        LeaveResolver(repo).resolve(1, FRIDAY, POLICY)
