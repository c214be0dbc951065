from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from src.timekeeping.timekeeping.attendance.service import AttendanceService
from src.timekeeping.timekeeping.core.enums import PunchStatus, Role
from src.timekeeping.timekeeping.core.exceptions import (
    AuthorizationError,
    NegativeDurationError,
    NotFoundError,
    PunchStateError,
    ValidationError,
)
from src.timekeeping.timekeeping.reports.service import SummaryService
from src.timekeeping.timekeeping.schedules.model import Schedule
from src.timekeeping.timekeeping.users.model import Employee

DAY = date(2024, 1, 15)


def at(hour: int, minute: int = 0, day: int = 15) -> datetime:
    return datetime(2024, 1, day, hour, minute)


def test_punch_in_then_out_computes_metrics_and_daily_summary(attendance_service, summaries):
    rec = attendance_service.punch_in("u1", now=at(9, 30))
    assert rec.status == PunchStatus.ACTIVE
    assert rec.work_date == DAY

    done = attendance_service.punch_out("u1", now=at(18))

    assert done.status == PunchStatus.COMPLETED
    assert done.metrics.late.total_minutes == 30
    assert done.metrics.total_worked.total_minutes == 510

    summary = summaries.get("u1", DAY)
    assert summary.punch_count == 1
    assert summary.aggregate.total_worked.total_minutes == 510

    data = done.to_dict()
    assert data["status"] == "completed"
    assert data["metrics"]["late"]["totalMinutes"] == 30
    assert data["punchOut"] == "2024-01-15T18:00:00"


def test_cannot_punch_in_twice(attendance_service):
    attendance_service.punch_in("u1", now=at(9))
    with pytest.raises(PunchStateError):
        attendance_service.punch_in("u1", now=at(9, 5))


def test_cannot_punch_out_without_open_punch(attendance_service):
    with pytest.raises(PunchStateError):
        attendance_service.punch_out("u1", now=at(18))


def test_blank_user_id_rejected(attendance_service):
    with pytest.raises(ValidationError):
        attendance_service.punch_in("  ", now=at(9))


def test_two_punches_same_day_are_summed(attendance_service, summaries):
    attendance_service.punch_in("u1", now=at(9))
    attendance_service.punch_out("u1", now=at(12))
    attendance_service.punch_in("u1", now=at(13))
    attendance_service.punch_out("u1", now=at(18))

    summary = summaries.get("u1", DAY)
    assert summary.punch_count == 2
    assert summary.aggregate.total_worked.total_minutes == 480
    # second punch starts 4h after the scheduled start
    assert summary.aggregate.late.total_minutes == 240
    # first punch leaves at 12:00
    assert summary.aggregate.undertime.total_minutes == 360


def test_employee_without_schedule_uses_default(attendance_service):
    attendance_service.punch_in("u3", now=at(9))
    done = attendance_service.punch_out("u3", now=at(20))

    assert done.metrics.overtime.total_minutes == 120


def test_night_shift_keeps_work_date_of_punch_in(attendance_service, summaries):
    attendance_service.punch_in("u2", now=at(22))
    done = attendance_service.punch_out("u2", now=at(6, day=16))

    assert done.work_date == DAY
    assert done.metrics.night_differential.hours == 8
    assert summaries.get("u2", DAY).punch_count == 1


def test_status_reports_elapsed_minutes(attendance_service):
    assert attendance_service.get_status("u1").is_punched_in is False

    attendance_service.punch_in("u1", now=at(9))
    status = attendance_service.get_status("u1", now=at(10, 15))

    assert status.is_punched_in is True
    assert status.elapsed_minutes == 75
    assert status.to_dict()["currentPunch"]["punchId"] == status.current_punch.punch_id


def test_history_most_recent_first_with_limit(attendance_service):
    for day in (15, 16, 17):
        attendance_service.punch_in("u1", now=at(9, day=day))
        attendance_service.punch_out("u1", now=at(18, day=day))

    history = attendance_service.get_history("u1", limit=2)
    assert [r.work_date.day for r in history] == [17, 16]

    ranged = attendance_service.get_history("u1", start=date(2024, 1, 15), end=date(2024, 1, 15))
    assert [r.work_date.day for r in ranged] == [15]


def test_history_rejects_non_positive_limit(attendance_service):
    with pytest.raises(ValidationError):
        attendance_service.get_history("u1", limit=0)


def test_admin_edit_recomputes_metrics_and_summary(attendance_service, summaries):
    attendance_service.punch_in("u1", now=at(9))
    rec = attendance_service.punch_out("u1", now=at(18))

    edited = attendance_service.edit_punch(
        current_role=Role.ADMIN,
        punch_id=rec.punch_id,
        punch_out="2024-01-15T20:00:00",
    )

    assert edited.edited_by_admin is True
    assert edited.metrics.overtime.total_minutes == 120
    assert summaries.get("u1", DAY).aggregate.total_worked.total_minutes == 660


def test_admin_edit_can_close_an_open_punch(attendance_service, summaries):
    rec = attendance_service.punch_in("u1", now=at(9))

    edited = attendance_service.edit_punch(current_role=Role.ADMIN, punch_id=rec.punch_id, punch_out=at(17))

    assert edited.status == PunchStatus.COMPLETED
    assert edited.metrics.undertime.total_minutes == 60
    assert attendance_service.get_status("u1").is_punched_in is False
    assert summaries.get("u1", DAY).punch_count == 1


def test_admin_edit_rejects_reversed_times_and_keeps_record(attendance_service, punches):
    attendance_service.punch_in("u1", now=at(9))
    rec = attendance_service.punch_out("u1", now=at(18))

    with pytest.raises(NegativeDurationError):
        attendance_service.edit_punch(current_role=Role.ADMIN, punch_id=rec.punch_id, punch_out=at(8))

    assert punches.get_by_id(rec.punch_id) == rec


def test_edit_requires_admin_and_existing_punch(attendance_service):
    with pytest.raises(AuthorizationError):
        attendance_service.edit_punch(current_role=Role.EMPLOYEE, punch_id="p1", punch_out=at(18))
    with pytest.raises(NotFoundError):
        attendance_service.edit_punch(current_role=Role.ADMIN, punch_id="missing", punch_out=at(18))


def test_delete_recomputes_summary(attendance_service, summaries):
    attendance_service.punch_in("u1", now=at(9))
    rec = attendance_service.punch_out("u1", now=at(18))

    attendance_service.delete_punch(current_role=Role.ADMIN, punch_id=rec.punch_id)

    summary = summaries.get("u1", DAY)
    assert summary.punch_count == 0
    assert summary.aggregate.total_worked.total_minutes == 0


def test_list_punches_for_date(attendance_service):
    attendance_service.punch_in("u1", now=at(9))
    attendance_service.punch_in("u3", now=at(9, day=16))

    rows = attendance_service.list_punches(current_role=Role.ADMIN, work_date=DAY)
    assert [r.user_id for r in rows] == ["u1"]

    with pytest.raises(AuthorizationError):
        attendance_service.list_punches(current_role=Role.EMPLOYEE, work_date=DAY)


MANILA = timezone(timedelta(hours=8))


@pytest.fixture
def utc_attendance(punches, employees, summaries):
    employees.by_id["u4"] = Employee(
        user_id="u4",
        name="Dani",
        email="dani@example.com",
        schedule=Schedule.from_strings("09:00", "18:00"),
        timezone=MANILA,
    )
    summary_service = SummaryService(punches, employees, summaries, tz=timezone.utc)
    return AttendanceService(punches, employees, summary_service, tz=timezone.utc)


def utc(hour: int, minute: int = 0, day: int = 15) -> datetime:
    return datetime(2024, 1, day, hour, minute, tzinfo=timezone.utc)


def test_each_employee_measured_on_own_time_zone(utc_attendance):
    # 01:00-10:00 UTC is 09:00-18:00 in Manila
    utc_attendance.punch_in("u4", now=utc(1))
    manila = utc_attendance.punch_out("u4", now=utc(10))

    assert manila.metrics.late.total_minutes == 0
    assert manila.metrics.undertime.total_minutes == 0
    assert manila.metrics.regular.total_minutes == 540

    # u1 has no zone of its own and falls back to UTC
    utc_attendance.punch_in("u1", now=utc(1))
    fallback = utc_attendance.punch_out("u1", now=utc(10))

    assert fallback.metrics.late.total_minutes == 0
    assert fallback.metrics.undertime.total_minutes == 480


def test_work_date_taken_in_employee_time_zone(utc_attendance, summaries):
    rec = utc_attendance.punch_in("u4", now=utc(20))

    assert rec.work_date == date(2024, 1, 16)
    assert rec.punch_in.hour == 4

    utc_attendance.punch_out("u4", now=utc(23))
    assert summaries.get("u4", date(2024, 1, 16)).punch_count == 1


def test_admin_edit_rejects_aware_timestamp_on_naive_punch(attendance_service, punches):
    rec = attendance_service.punch_in("u1", now=at(9))

    with pytest.raises(ValidationError):
        attendance_service.edit_punch(current_role=Role.ADMIN, punch_id=rec.punch_id, punch_in="2024-01-15T08:30:00Z")

    assert punches.get_by_id(rec.punch_id) == rec
    attendance_service.punch_out("u1", now=at(18))
    assert [r.punch_id for r in attendance_service.get_history("u1")] == [rec.punch_id]
