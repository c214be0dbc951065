from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional

from .attendance.repository import PunchRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_REPORT_DAYS
from .core.enums import OvernightPolicy
from .reports.repository import DailySummaryRepository
from .reports.service import SummaryService
from .schedules.model import Schedule
from .users.repository import EmployeeRepository
from .users.service import EmployeeService


@dataclass(frozen=True)
class Container:
    punches_repo: PunchRepository
    employees_repo: EmployeeRepository
    summaries_repo: DailySummaryRepository

    summary_service: SummaryService
    attendance_service: AttendanceService
    employee_service: EmployeeService


def build_container(
    *,
    punches: PunchRepository,
    employees: EmployeeRepository,
    summaries: DailySummaryRepository,
    tz: Optional[tzinfo] = None,
    schedule: Optional[Schedule] = None,
    overnight_policy: OvernightPolicy = OvernightPolicy.NAIVE,
    history_limit: int = DEFAULT_HISTORY_LIMIT,
    report_days: int = DEFAULT_REPORT_DAYS,
) -> Container:
    summary_service = SummaryService(punches, employees, summaries, tz=tz, report_days=report_days)
    attendance_service = AttendanceService(
        punches,
        employees,
        summary_service,
        tz=tz,
        schedule=schedule,
        overnight_policy=overnight_policy,
        history_limit=history_limit,
    )

    return Container(
        punches_repo=punches,
        employees_repo=employees,
        summaries_repo=summaries,
        summary_service=summary_service,
        attendance_service=attendance_service,
        employee_service=EmployeeService(employees),
    )
