from datetime import timedelta

import pytest

from worktime.core.enums import CalculationMethod, DayType, PunchKind, RequestStatus, WorkStatus
from worktime.core.exceptions import LookupUnavailable, PolicyConfigMissing, ValidationError
from worktime.leave.model import LeaveGrant
from worktime_testkit import FRIDAY, MONDAY, SATURDAY, SUNDAY

USER = 1


def test_weekday_summary_is_stored(world):
    world.punches.shift(USER, FRIDAY, "09:00", "19:00")

    summary = world.container.orchestrator.recalculate(USER, FRIDAY)

    assert summary.basic_hours == 8.0
    assert summary.overtime_hours == 1.0
    assert summary.work_status_tag == WorkStatus.NORMAL
    assert summary.day_type == DayType.WEEKDAY
    assert summary.auto_calculated
    assert summary.calculated_at == world.clock.now
    assert world.summaries.get(USER, FRIDAY) == summary


def test_overnight_session_stored_under_check_in_date(world):
    world.punches.shift(USER, FRIDAY, "20:00", "06:00")

    summary = world.container.orchestrator.recalculate(USER, FRIDAY)

    assert summary.calculation_method == CalculationMethod.SPLIT_BY_DATE
    assert summary.basic_hours == 10.0
    assert summary.overtime_hours == 0.0
    assert summary.substitute_leave_hours == 6.0
    assert summary.night_hours == 8.0
    assert world.summaries.get(USER, SATURDAY) is None


def test_hours_rounded_half_up_once(world):
    # 09:00-18:15 less the meal break is 8.25h.
    world.punches.shift(USER, FRIDAY, "09:00", "18:15")

    summary = world.container.orchestrator.recalculate(USER, FRIDAY)

    assert summary.basic_hours == 8.0
    assert summary.overtime_hours == 0.3


def test_missing_check_out_is_tagged(world):
    world.punches.add(USER, FRIDAY, "09:00", PunchKind.CHECK_IN)

    summary = world.container.orchestrator.recalculate(USER, FRIDAY)

    assert summary.work_status_tag == WorkStatus.CHECKOUT_MISSING
    assert summary.basic_hours == 0.0
    assert summary.check_in_time is not None
    assert summary.check_out_time is None


def test_recomputation_is_idempotent(world):
    world.punches.shift(USER, FRIDAY, "09:00", "19:00")
    first = world.container.orchestrator.recalculate(USER, FRIDAY)

    world.clock.tick(30)
    second = world.container.orchestrator.recalculate(USER, FRIDAY)

    assert second == first
    assert len(world.summaries.upserts) == 1


def test_new_punch_updates_the_row(world):
    world.punches.shift(USER, FRIDAY, "09:00", "17:00")
    world.container.orchestrator.recalculate(USER, FRIDAY)

    world.clock.tick(30)
    world.punches.shift(USER, FRIDAY, "09:30", "20:00")
    summary = world.container.orchestrator.recalculate(USER, FRIDAY)

    assert summary.overtime_hours == 2.0
    assert summary.calculated_at == world.clock.now
    assert len(world.summaries.upserts) == 2


def test_approved_leave_wins_over_punches(world):
    world.punches.shift(USER, FRIDAY, "09:00", "19:00")
    world.leave.grants.append(
        LeaveGrant(
            grant_id=4,
            user_id=USER,
            start_date=FRIDAY,
            end_date=FRIDAY,
            leave_kind="sick",
            full_day=True,
            status=RequestStatus.APPROVED,
        )
    )

    summary = world.container.orchestrator.recalculate(USER, FRIDAY)

    assert summary.work_status_tag == WorkStatus.LEAVE
    assert summary.basic_hours == 8.0
    assert summary.overtime_hours == 0.0
    assert "sick" in summary.notes


@pytest.mark.parametrize("failing", ["leave", "holidays", "policy"])
def test_failed_lookup_leaves_stored_row_untouched(world, failing):
    world.punches.shift(USER, FRIDAY, "09:00", "17:00")
    before = world.container.orchestrator.recalculate(USER, FRIDAY)
    world.punches.shift(USER, FRIDAY, "09:00", "21:00")

    if failing == "leave":
        world.leave.fail = True
    elif failing == "holidays":
        world.holidays.fail = True
    else:
        world.policies.fail = True

    with pytest.raises(LookupUnavailable):
        world.container.orchestrator.recalculate(USER, FRIDAY)

    assert world.summaries.get(USER, FRIDAY) == before
    assert len(world.summaries.upserts) == 1


def test_missing_policy_aborts_without_write(world):
    world.policies.policy = None
    world.punches.shift(USER, FRIDAY, "09:00", "17:00")

    with pytest.raises(PolicyConfigMissing):
        world.container.orchestrator.recalculate(USER, FRIDAY)
    assert world.summaries.upserts == []


def test_manual_row_survives_unless_forced(world):
    manual = world.container.summary_service.override(USER, FRIDAY, figures={"basic_hours": 6})
    world.punches.shift(USER, FRIDAY, "09:00", "19:00")

    kept = world.container.orchestrator.recalculate(USER, FRIDAY)
    assert kept == manual
    assert not kept.auto_calculated

    forced = world.container.orchestrator.recalculate(USER, FRIDAY, force=True)
    assert forced.auto_calculated
    assert forced.basic_hours == 8.0
    assert forced.overtime_hours == 1.0


def test_range_recompute_covers_every_day(world):
    world.punches.shift(USER, FRIDAY, "09:00", "19:00")
    world.holidays.holidays[MONDAY] = "Founders Day"

    rows = world.container.orchestrator.recalculate_range(USER, FRIDAY, MONDAY)

    assert [r.work_date for r in rows] == [FRIDAY, SATURDAY, SUNDAY, MONDAY]
    assert rows[0].work_status_tag == WorkStatus.NORMAL
    assert all(r.work_status_tag == WorkStatus.ABSENT for r in rows[1:])
    assert rows[3].is_holiday and rows[3].holiday_name == "Founders Day"


def test_range_must_be_ordered(world):
    with pytest.raises(ValidationError):
        world.container.orchestrator.recalculate_range(USER, MONDAY, MONDAY - timedelta(days=1))


def test_leave_on_overnight_shift_drops_night_and_leave_credits(world):
    world.punches.shift(USER, SATURDAY, "20:00", "06:00")
    world.leave.grants.append(
        LeaveGrant(
            grant_id=9,
            user_id=USER,
            start_date=SATURDAY,
            end_date=SATURDAY,
            leave_kind="annual",
            full_day=True,
            status=RequestStatus.APPROVED,
        )
    )

    summary = world.container.orchestrator.recalculate(USER, SATURDAY)

    assert summary.work_status_tag == WorkStatus.LEAVE
    assert summary.basic_hours == 8.0
    assert summary.night_hours == 0.0
    assert summary.substitute_leave_hours == 0.0
    assert summary.compensatory_leave_hours == 0.0
