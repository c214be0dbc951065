from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

import pytest

from src.timekeeping.timekeeping.attendance.model import PunchRecord
from src.timekeeping.timekeeping.attendance.service import AttendanceService
from src.timekeeping.timekeeping.core.enums import PunchStatus, Role
from src.timekeeping.timekeeping.reports.model import DailySummary
from src.timekeeping.timekeeping.reports.service import SummaryService
from src.timekeeping.timekeeping.schedules.model import Schedule
from src.timekeeping.timekeeping.users.model import Employee


class InMemoryPunches:
    def __init__(self):
        self.records: dict[str, PunchRecord] = {}
        self._id = 0

    def get_by_id(self, punch_id: str) -> Optional[PunchRecord]:
        return self.records.get(punch_id)

    def get_open_for_user(self, user_id: str) -> Optional[PunchRecord]:
        for r in self.records.values():
            if r.user_id == user_id and r.punch_out is None:
                return r
        return None

    def list_for_user(self, user_id: str):
        return [r for r in self.records.values() if r.user_id == user_id]

    def list_for_date(self, work_date: date, *, user_id: Optional[str] = None):
        return [
            r
            for r in self.records.values()
            if r.work_date == work_date and (user_id is None or r.user_id == user_id)
        ]

    def list_completed_for_user_and_date(self, user_id: str, work_date: date):
        return [
            r
            for r in self.records.values()
            if r.user_id == user_id and r.work_date == work_date and r.status == PunchStatus.COMPLETED
        ]

    def create_punch_in(self, *, user_id: str, work_date: date, punch_in: datetime) -> PunchRecord:
        self._id += 1
        rec = PunchRecord(
            punch_id=f"p{self._id}",
            user_id=user_id,
            work_date=work_date,
            punch_in=punch_in,
            punch_out=None,
            status=PunchStatus.ACTIVE,
        )
        self.records[rec.punch_id] = rec
        return rec

    def save(self, record: PunchRecord) -> None:
        self.records[record.punch_id] = record

    def delete(self, punch_id: str) -> bool:
        return self.records.pop(punch_id, None) is not None


@dataclass
class InMemoryEmployees:
    by_id: dict[str, Employee] = field(default_factory=dict)

    def get_by_id(self, user_id: str) -> Optional[Employee]:
        return self.by_id.get(user_id)

    def list_by_ids(self, user_ids):
        return [self.by_id[u] for u in user_ids if u in self.by_id]

    def list_all(self):
        return list(self.by_id.values())

    def save(self, employee: Employee) -> bool:
        if employee.user_id not in self.by_id:
            return False
        self.by_id[employee.user_id] = employee
        return True


class InMemorySummaries:
    def __init__(self):
        self.by_key: dict[tuple[str, date], DailySummary] = {}

    def get(self, user_id: str, work_date: date) -> Optional[DailySummary]:
        return self.by_key.get((user_id, work_date))

    def upsert(self, summary: DailySummary) -> None:
        self.by_key[(summary.user_id, summary.work_date)] = summary

    def list_range(self, *, start: date, end: date, user_id: Optional[str] = None):
        return [
            s
            for s in self.by_key.values()
            if start <= s.work_date <= end and (user_id is None or s.user_id == user_id)
        ]


@pytest.fixture
def punches() -> InMemoryPunches:
    return InMemoryPunches()


@pytest.fixture
def summaries() -> InMemorySummaries:
    return InMemorySummaries()


@pytest.fixture
def employees() -> InMemoryEmployees:
    return InMemoryEmployees(
        {
            "u1": Employee(
                user_id="u1",
                name="Ana",
                email="ana@example.com",
                schedule=Schedule.from_strings("09:00", "18:00"),
            ),
            "u2": Employee(
                user_id="u2",
                name="Ben",
                email="ben@example.com",
                schedule=Schedule.from_strings("22:00", "06:00"),
            ),
            "u3": Employee(user_id="u3", name="Cruz", email="cruz@example.com"),
            "admin": Employee(user_id="admin", name="Root", email="root@example.com", role=Role.ADMIN),
        }
    )


def fixed_clock(value: datetime):
    return lambda tz=None: value


@pytest.fixture
def clock_now() -> datetime:
    return datetime(2024, 1, 17, 12, 0)


@pytest.fixture
def summary_service(punches, employees, summaries, clock_now) -> SummaryService:
    return SummaryService(punches, employees, summaries, clock=fixed_clock(clock_now))


@pytest.fixture
def attendance_service(punches, employees, summary_service, clock_now) -> AttendanceService:
    return AttendanceService(punches, employees, summary_service, clock=fixed_clock(clock_now))
