from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_instant, parse_iso_date, to_iso
from ..metrics.aggregator import aggregate_metrics
from ..metrics.model import PeriodAggregate
from ..schedules.model import Schedule
from ..attendance.model import PunchRecord

EMPTY_AGGREGATE = aggregate_metrics([])


@dataclass(frozen=True)
class DailySummary:
    """Totals of one employee's completed punches on one work date."""

    user_id: str
    work_date: date
    aggregate: PeriodAggregate
    updated_at: Optional[datetime] = None

    @property
    def punch_count(self) -> int:
        return self.aggregate.count

    def to_dict(self) -> dict:
        data = {"userId": self.user_id, "date": self.work_date.isoformat()}
        data.update(self.aggregate.to_dict(count_key="punchCount"))
        if self.updated_at:
            data["updatedAt"] = to_iso(self.updated_at)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DailySummary":
        updated_at = data.get("updatedAt")
        return cls(
            user_id=str(data["userId"]),
            work_date=parse_iso_date(data["date"]),
            aggregate=PeriodAggregate.from_dict(data, count_key="punchCount"),
            updated_at=parse_instant(updated_at) if updated_at else None,
        )

    @classmethod
    def empty(cls, user_id: str, work_date: date) -> "DailySummary":
        return cls(user_id=user_id, work_date=work_date, aggregate=EMPTY_AGGREGATE)


@dataclass(frozen=True)
class WeeklySummary:
    """One employee's daily summaries over a date range, and their totals.

    ``totals.count`` is the number of days worked; ``total_punches`` sums
    the daily punch counts.
    """

    user_id: str
    start_date: date
    end_date: date
    daily_summaries: list[DailySummary]
    totals: PeriodAggregate
    total_punches: int

    @property
    def days_worked(self) -> int:
        return self.totals.count

    def to_dict(self) -> dict:
        weekly = self.totals.to_dict(count_key="daysWorked")
        weekly["totalPunches"] = self.total_punches
        return {
            "userId": self.user_id,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "dailySummaries": [s.to_dict() for s in self.daily_summaries],
            "weeklyTotals": weekly,
        }


@dataclass(frozen=True)
class EmployeeDailyReport:
    user_id: str
    user_name: str
    user_email: str
    schedule: Optional[Schedule]
    summary: DailySummary

    def to_dict(self) -> dict:
        data = self.summary.to_dict()
        data.update(
            {
                "userName": self.user_name,
                "userEmail": self.user_email,
                "schedule": self.schedule.to_dict() if self.schedule else None,
            }
        )
        return data


@dataclass(frozen=True)
class EmployeeWeeklyReport:
    user_id: str
    user_name: str
    user_email: str
    schedule: Optional[Schedule]
    weekly: WeeklySummary

    def to_dict(self) -> dict:
        data = self.weekly.to_dict()
        data.update(
            {
                "userName": self.user_name,
                "userEmail": self.user_email,
                "schedule": self.schedule.to_dict() if self.schedule else None,
                "daysWorked": self.weekly.days_worked,
            }
        )
        return data


@dataclass(frozen=True)
class Dashboard:
    user_name: Optional[str]
    schedule: Optional[Schedule]
    today: date
    is_punched_in: bool
    current_punch: Optional[PunchRecord]
    elapsed_minutes: Optional[int]
    today_summary: Optional[DailySummary]
    week_start: date
    week_totals: PeriodAggregate

    def to_dict(self) -> dict:
        current = None
        if self.current_punch:
            current = {
                "punchId": self.current_punch.punch_id,
                "punchIn": to_iso(self.current_punch.punch_in),
                "elapsedMinutes": self.elapsed_minutes,
            }
        return {
            "user": {"name": self.user_name, "schedule": self.schedule.to_dict() if self.schedule else None},
            "today": {
                "date": self.today.isoformat(),
                "isPunchedIn": self.is_punched_in,
                "currentPunch": current,
                "summary": self.today_summary.to_dict() if self.today_summary else None,
            },
            "week": {
                "startDate": self.week_start.isoformat(),
                "daysWorked": self.week_totals.count,
                "totals": self.week_totals.to_dict(),
            },
        }


@dataclass(frozen=True)
class DailyReport:
    """All employees' summaries for one date; ``totals.count`` is the employee count."""

    work_date: date
    employee_summaries: list[EmployeeDailyReport]
    totals: PeriodAggregate

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "employeeSummaries": [r.to_dict() for r in self.employee_summaries],
            "totals": self.totals.to_dict(count_key="totalEmployees"),
        }


@dataclass(frozen=True)
class WeeklyReport:
    start_date: date
    end_date: date
    employee_reports: list[EmployeeWeeklyReport]

    @property
    def total_employees(self) -> int:
        return len(self.employee_reports)

    def to_dict(self) -> dict:
        return {
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "employeeReports": [r.to_dict() for r in self.employee_reports],
            "totalEmployees": self.total_employees,
        }
