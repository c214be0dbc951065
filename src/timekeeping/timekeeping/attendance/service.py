from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, tzinfo
from typing import Callable, Optional, Union

from ..common.datetime_utils import Instant, now_local, parse_instant, to_local
from ..common.validators import require_non_empty, require_positive_limit
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.enums import OvernightPolicy, PunchStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, PunchStateError, ValidationError
from ..metrics.calculator import calculate_work_metrics
from ..metrics.model import PunchMetrics
from ..reports.service import SummaryService
from ..schedules.model import Schedule, default_schedule
from ..users.repository import EmployeeRepository
from .model import PunchRecord, PunchStatusView
from .repository import PunchRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Punch lifecycle: no-punch -> active -> completed (-> completed on admin edit).

    Every transition that closes or changes a completed punch recomputes the
    punch metrics in full and rebuilds the daily summary for its work date.
    At most one active punch per user is assumed; the repository is expected
    to serialize concurrent transitions for the same user.
    """

    def __init__(
        self,
        punches: PunchRepository,
        employees: EmployeeRepository,
        summaries: SummaryService,
        *,
        tz: Optional[tzinfo] = None,
        schedule: Optional[Schedule] = None,
        overnight_policy: Optional[Union[OvernightPolicy, str]] = None,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        clock: Callable[[Optional[tzinfo]], datetime] = now_local,
    ):
        self._punches = punches
        self._employees = employees
        self._summaries = summaries
        self._tz = tz
        self._default_schedule = schedule or default_schedule()
        self._overnight_policy = overnight_policy
        self._history_limit = int(history_limit)
        self._clock = clock

    def _zone_for(self, user_id: str) -> Optional[tzinfo]:
        employee = self._employees.get_by_id(user_id)
        return employee.zone(self._tz) if employee else self._tz

    def _now(self, now: Optional[datetime], tz: Optional[tzinfo]) -> datetime:
        return to_local(now, tz) if now else self._clock(tz)

    def _schedule_for(self, user_id: str) -> Schedule:
        employee = self._employees.get_by_id(user_id)
        if employee and employee.schedule:
            return employee.schedule
        return self._default_schedule

    def _metrics(self, user_id: str, punch_in: datetime, punch_out: datetime) -> PunchMetrics:
        return calculate_work_metrics(
            punch_in,
            punch_out,
            self._schedule_for(user_id),
            tz=self._zone_for(user_id),
            overnight_policy=self._overnight_policy,
        )

    def punch_in(self, user_id: str, *, now: Optional[datetime] = None) -> PunchRecord:
        user_id = require_non_empty(user_id, "user_id")
        now = self._now(now, self._zone_for(user_id))

        if self._punches.get_open_for_user(user_id):
            logger.warning("Rejected punch-in for %s: already punched in", user_id)
            raise PunchStateError("Already punched in. Please punch out first.")

        record = self._punches.create_punch_in(user_id=user_id, work_date=now.date(), punch_in=now)
        logger.info("Punch-in %s recorded for %s at %s", record.punch_id, user_id, now.isoformat())
        return record

    def punch_out(self, user_id: str, *, now: Optional[datetime] = None) -> PunchRecord:
        user_id = require_non_empty(user_id, "user_id")
        now = self._now(now, self._zone_for(user_id))

        record = self._punches.get_open_for_user(user_id)
        if not record:
            logger.warning("Rejected punch-out for %s: no active punch", user_id)
            raise PunchStateError("No active punch found. Please punch in first.")

        completed = replace(
            record,
            punch_out=now,
            status=PunchStatus.COMPLETED,
            metrics=self._metrics(user_id, record.punch_in, now),
        )
        self._punches.save(completed)
        self._summaries.recompute_daily(user_id, record.work_date)
        logger.info("Punch-out %s recorded for %s at %s", record.punch_id, user_id, now.isoformat())
        return completed

    def get_status(self, user_id: str, *, now: Optional[datetime] = None) -> PunchStatusView:
        record = self._punches.get_open_for_user(user_id)
        if not record:
            return PunchStatusView(is_punched_in=False)

        tz = self._zone_for(user_id)
        elapsed = int((self._now(now, tz) - to_local(record.punch_in, tz)).total_seconds() // 60)
        return PunchStatusView(is_punched_in=True, current_punch=record, elapsed_minutes=elapsed)

    def get_history(
        self,
        user_id: str,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> list[PunchRecord]:
        """Most recent punches first, optionally restricted to a work-date range."""
        limit = require_positive_limit(limit if limit is not None else self._history_limit, "limit")

        records = list(self._punches.list_for_user(user_id))
        if start:
            records = [r for r in records if r.work_date >= start]
        if end:
            records = [r for r in records if r.work_date <= end]
        records.sort(key=lambda r: r.punch_in, reverse=True)
        return records[:limit]

    def list_punches(
        self,
        *,
        current_role: Role,
        work_date: Optional[date] = None,
        user_id: Optional[str] = None,
    ) -> list[PunchRecord]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        work_date = work_date or self._now(None, self._tz).date()
        return list(self._punches.list_for_date(work_date, user_id=user_id))

    @staticmethod
    def _edited(value: Instant, tz: Optional[tzinfo], record: PunchRecord) -> datetime:
        """Corrected timestamp, held to the stored punch's naive/aware form."""
        instant = to_local(parse_instant(value), tz)
        if (instant.tzinfo is None) != (record.punch_in.tzinfo is None):
            form = "naive" if record.punch_in.tzinfo is None else "timezone-aware"
            raise ValidationError(f"Corrected timestamp {value!r} must be {form} like the stored punch")
        return instant

    def edit_punch(
        self,
        *,
        current_role: Role,
        punch_id: str,
        punch_in: Optional[Instant] = None,
        punch_out: Optional[Instant] = None,
    ) -> PunchRecord:
        """Admin correction of punch timestamps.

        When the corrected punch has both timestamps its metrics are
        recomputed from scratch and it becomes completed. The work date is
        kept as first recorded.
        """
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        record = self._punches.get_by_id(punch_id)
        if not record:
            raise NotFoundError("Punch record not found")
        if punch_in is None and punch_out is None:
            raise ValidationError("Nothing to update: provide punch_in and/or punch_out")

        tz = self._zone_for(record.user_id)
        new_in = self._edited(punch_in, tz, record) if punch_in is not None else record.punch_in
        new_out = self._edited(punch_out, tz, record) if punch_out is not None else record.punch_out

        updated = replace(record, punch_in=new_in, punch_out=new_out, edited_by_admin=True)
        if new_out is not None:
            updated = replace(
                updated,
                status=PunchStatus.COMPLETED,
                metrics=self._metrics(record.user_id, new_in, new_out),
            )

        self._punches.save(updated)
        if updated.status == PunchStatus.COMPLETED:
            self._summaries.recompute_daily(record.user_id, record.work_date)
        logger.info("Punch %s edited by admin", punch_id)
        return updated

    def delete_punch(self, *, current_role: Role, punch_id: str) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")

        record = self._punches.get_by_id(punch_id)
        if not record:
            raise NotFoundError("Punch record not found")

        if not self._punches.delete(punch_id):
            raise NotFoundError("Punch record not found")
        self._summaries.recompute_daily(record.user_id, record.work_date)
        logger.info("Punch %s deleted by admin", punch_id)
