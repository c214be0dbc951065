from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from typing import Any, Optional, Union

from ..common.datetime_utils import Instant, parse_instant, to_local
from ..core.constants import MINUTES_PER_HOUR
from ..core.enums import OvernightPolicy
from ..core.exceptions import NegativeDurationError, ValidationError
from ..schedules.model import Schedule
from .duration import to_duration
from .factory import ScheduledMinutesFactory
from .model import PunchMetrics
from .night_differential import compute_night_differential

_factory = ScheduledMinutesFactory()


def _minute_of_day(value: datetime) -> int:
    return value.hour * MINUTES_PER_HOUR + value.minute


def _resolve_instants(punch_in: Instant, punch_out: Instant, tz: Optional[tzinfo]) -> tuple[datetime, datetime]:
    start = to_local(parse_instant(punch_in), tz)
    end = to_local(parse_instant(punch_out), tz)
    if (start.tzinfo is None) != (end.tzinfo is None):
        raise ValidationError("punch_in and punch_out must both be timezone-aware or both naive")
    if tz is None and start.tzinfo is not None:
        end = end.astimezone(start.tzinfo)
    if end < start:
        raise NegativeDurationError(f"punch_out {end.isoformat()} is earlier than punch_in {start.isoformat()}")
    return start, end


def calculate_work_metrics(
    punch_in: Instant,
    punch_out: Instant,
    schedule: Union[Schedule, Any],
    *,
    tz: Optional[tzinfo] = None,
    overnight_policy: Optional[Union[OvernightPolicy, str]] = None,
) -> PunchMetrics:
    """Compute the metrics record for one punch.

    ``tz`` is the employee's zone: aware instants are converted to it and
    naive instants are read as already being in it. Without ``tz`` each
    instant's own wall clock is used.

    Lateness and undertime compare wall-clock minutes against the schedule.
    Undertime is only registered when punch-out falls on the punch-in
    calendar date. Regular time is capped at the scheduled span and reduced
    by lateness; anything past the scheduled span is overtime.
    """
    start, end = _resolve_instants(punch_in, punch_out, tz)
    schedule = Schedule.from_value(schedule)

    total_worked = (end - start) // timedelta(minutes=1)
    scheduled = _factory.for_policy(overnight_policy).scheduled_minutes(schedule)

    punch_in_min = _minute_of_day(start)
    punch_out_min = _minute_of_day(end)

    late = max(0, punch_in_min - schedule.start)

    undertime = 0
    if end.date() == start.date() and punch_out_min < schedule.end:
        undertime = schedule.end - punch_out_min

    regular = max(0, min(total_worked, scheduled) - late)
    overtime = max(0, total_worked - scheduled)
    night = compute_night_differential(start, end)

    return PunchMetrics(
        total_worked=to_duration(total_worked),
        regular=to_duration(regular),
        overtime=to_duration(overtime),
        night_differential=to_duration(night),
        late=to_duration(late),
        undertime=to_duration(undertime),
        punch_in=start,
        punch_out=end,
    )
