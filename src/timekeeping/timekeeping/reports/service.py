from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Callable, Optional

from ..attendance.repository import PunchRepository
from ..common.datetime_utils import now_local, to_local, week_start
from ..core.constants import DEFAULT_REPORT_DAYS
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..metrics.aggregator import aggregate_metrics
from ..users.model import Employee
from ..users.repository import EmployeeRepository
from .model import (
    Dashboard,
    DailyReport,
    DailySummary,
    EmployeeDailyReport,
    EmployeeWeeklyReport,
    WeeklyReport,
    WeeklySummary,
)
from .repository import DailySummaryRepository

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


class SummaryService:
    """Daily and weekly totals built from per-punch metrics.

    Daily summaries are always rebuilt from the full set of completed
    punches for the day, so calling :meth:`recompute_daily` again after any
    create/edit/delete is safe.
    """

    def __init__(
        self,
        punches: PunchRepository,
        employees: EmployeeRepository,
        summaries: DailySummaryRepository,
        *,
        tz: Optional[tzinfo] = None,
        report_days: int = DEFAULT_REPORT_DAYS,
        clock: Callable[[Optional[tzinfo]], datetime] = now_local,
    ):
        self._punches = punches
        self._employees = employees
        self._summaries = summaries
        self._tz = tz
        self._report_days = int(report_days)
        self._clock = clock

    def _zone_for(self, employee: Optional[Employee]) -> Optional[tzinfo]:
        return employee.zone(self._tz) if employee else self._tz

    def _today(self, tz: Optional[tzinfo] = None) -> date:
        return self._clock(tz or self._tz).date()

    def _default_range(
        self, start: Optional[date], end: Optional[date], tz: Optional[tzinfo] = None
    ) -> tuple[date, date]:
        end = end or self._today(tz)
        start = start or end - timedelta(days=self._report_days)
        if start > end:
            raise ValidationError("start date must not be after end date")
        return start, end

    def recompute_daily(self, user_id: str, work_date: date) -> DailySummary:
        completed = self._punches.list_completed_for_user_and_date(user_id, work_date)
        aggregate = aggregate_metrics([p.metrics for p in completed])
        summary = DailySummary(
            user_id=user_id,
            work_date=work_date,
            aggregate=aggregate,
            updated_at=self._clock(self._tz),
        )
        self._summaries.upsert(summary)
        logger.debug("Daily summary rebuilt for %s on %s (%d punches)", user_id, work_date, aggregate.count)
        return summary

    def get_daily(self, user_id: str, work_date: Optional[date] = None) -> DailySummary:
        if work_date is None:
            work_date = self._today(self._zone_for(self._employees.get_by_id(user_id)))
        return self._summaries.get(user_id, work_date) or DailySummary.empty(user_id, work_date)

    @staticmethod
    def _weekly(user_id: str, start: date, end: date, dailies) -> WeeklySummary:
        dailies = sorted(dailies, key=lambda s: s.work_date, reverse=True)
        return WeeklySummary(
            user_id=user_id,
            start_date=start,
            end_date=end,
            daily_summaries=dailies,
            totals=aggregate_metrics([s.aggregate for s in dailies]),
            total_punches=sum(s.punch_count for s in dailies),
        )

    def get_weekly(self, user_id: str, *, start: Optional[date] = None, end: Optional[date] = None) -> WeeklySummary:
        tz = self._zone_for(self._employees.get_by_id(user_id))
        start, end = self._default_range(start, end, tz)
        return self._weekly(user_id, start, end, self._summaries.list_range(start=start, end=end, user_id=user_id))

    def get_dashboard(self, user_id: str, *, now: Optional[datetime] = None) -> Dashboard:
        employee = self._employees.get_by_id(user_id)
        tz = self._zone_for(employee)
        now = to_local(now, tz) if now else self._clock(tz)
        today = now.date()

        open_punch = self._punches.get_open_for_user(user_id)
        elapsed = None
        if open_punch:
            elapsed = int((now - to_local(open_punch.punch_in, tz)).total_seconds() // 60)

        start = week_start(today)
        week = self._summaries.list_range(start=start, end=today, user_id=user_id)

        return Dashboard(
            user_name=employee.name if employee else None,
            schedule=employee.schedule if employee else None,
            today=today,
            is_punched_in=open_punch is not None,
            current_punch=open_punch,
            elapsed_minutes=elapsed,
            today_summary=self._summaries.get(user_id, today),
            week_start=start,
            week_totals=aggregate_metrics([s.aggregate for s in week]),
        )

    def _employee_map(self, user_ids) -> dict[str, Employee]:
        return {e.user_id: e for e in self._employees.list_by_ids(list(user_ids))}

    def daily_report(self, *, current_role: Role, work_date: Optional[date] = None) -> DailyReport:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        work_date = work_date or self._today()
        summaries = self._summaries.list_range(start=work_date, end=work_date)
        employees = self._employee_map({s.user_id for s in summaries})

        rows = []
        for s in summaries:
            e = employees.get(s.user_id)
            rows.append(
                EmployeeDailyReport(
                    user_id=s.user_id,
                    user_name=e.name if e else UNKNOWN,
                    user_email=e.email if e else UNKNOWN,
                    schedule=e.schedule if e else None,
                    summary=s,
                )
            )

        return DailyReport(
            work_date=work_date,
            employee_summaries=rows,
            totals=aggregate_metrics([s.aggregate for s in summaries]),
        )

    def weekly_report(
        self,
        *,
        current_role: Role,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> WeeklyReport:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        start, end = self._default_range(start, end)
        by_user: dict[str, list[DailySummary]] = {}
        for s in self._summaries.list_range(start=start, end=end):
            by_user.setdefault(s.user_id, []).append(s)

        employees = self._employee_map(by_user.keys())
        reports = []
        for user_id, dailies in by_user.items():
            e = employees.get(user_id)
            weekly = self._weekly(user_id, start, end, dailies)
            reports.append(
                EmployeeWeeklyReport(
                    user_id=user_id,
                    user_name=e.name if e else UNKNOWN,
                    user_email=e.email if e else UNKNOWN,
                    schedule=e.schedule if e else None,
                    weekly=weekly,
                )
            )

        return WeeklyReport(start_date=start, end_date=end, employee_reports=reports)
