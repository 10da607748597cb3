from worktime.core.enums import PunchKind
from worktime_testkit import FRIDAY, MONDAY, SATURDAY


def test_rows_and_per_user_totals(world):
    world.punches.shift(1, FRIDAY, "09:00", "19:00")
    world.punches.shift(1, SATURDAY, "08:00", "19:00")
    world.punches.add(1, MONDAY, "09:00", PunchKind.CHECK_IN)
    world.punches.shift(2, FRIDAY, "20:00", "06:00")
    for user_id in (1, 2):
        world.container.orchestrator.recalculate_range(user_id, FRIDAY, MONDAY)

    report = world.container.report_service.build_report(start=FRIDAY, end=MONDAY)

    assert len(report.rows) == 8
    assert report.rows[0]["work_date"] == "2026-10-16"
    assert report.rows[0]["check_in"] == "09:00"

    one, two = report.summary
    assert one["user_id"] == 1
    assert one["days"] == 4
    assert one["basic_hours"] == 18.0
    assert one["overtime_hours"] == 1.0
    assert one["substitute_leave_hours"] == 11.0
    assert one["incomplete_days"] == 1

    assert two["basic_hours"] == 10.0
    assert two["night_hours"] == 8.0
    assert two["incomplete_days"] == 0


def test_report_for_one_user(world):
    world.punches.shift(1, FRIDAY, "09:00", "19:00")
    world.punches.shift(2, FRIDAY, "09:00", "19:00")
    world.container.orchestrator.recalculate(1, FRIDAY)
    world.container.orchestrator.recalculate(2, FRIDAY)

    report = world.container.report_service.build_report(start=FRIDAY, end=FRIDAY, user_id=2)

    assert [r["user_id"] for r in report.rows] == [2]
    assert report.summary[0]["basic_hours"] == 8.0
