"""Night differential: worked minutes whose wall-clock hour is in [22:00, 06:00).

Minutes are stepped from punch-in: the k-th minute starts at
``punch_in + k min`` and counts when its starting instant falls in a nightly
window. Rather than walking every minute, each window the shift touches is
intersected with that arithmetic sequence directly, so the cost grows with
the number of days spanned instead of the number of minutes worked.
"""
from __future__ import annotations

from datetime import datetime, time, timedelta

from ..core.constants import NIGHT_END_HOUR, NIGHT_START_HOUR
from ..core.exceptions import NegativeDurationError

ONE_MINUTE = timedelta(minutes=1)


def _ceil_minutes(delta: timedelta) -> int:
    """Smallest integer k with k minutes >= delta."""
    return -(-delta // ONE_MINUTE)


def _night_windows(punch_in: datetime, punch_out: datetime):
    day = punch_in.date() - timedelta(days=1)
    while day <= punch_out.date():
        start = datetime.combine(day, time(NIGHT_START_HOUR), tzinfo=punch_in.tzinfo)
        end = datetime.combine(day + timedelta(days=1), time(NIGHT_END_HOUR), tzinfo=punch_in.tzinfo)
        yield start, end
        day += timedelta(days=1)


def compute_night_differential(punch_in: datetime, punch_out: datetime) -> int:
    """Whole minutes of ``[punch_in, punch_out)`` that fall in the night window.

    Both instants are read on their own wall clock; convert them to the
    employee's zone before calling.
    """
    # Wall-clock arithmetic: drop the zone so window bounds compare as local times.
    punch_in = punch_in.replace(tzinfo=None)
    punch_out = punch_out.replace(tzinfo=None)
    if punch_out < punch_in:
        raise NegativeDurationError("punch_out is earlier than punch_in")

    steps = _ceil_minutes(punch_out - punch_in)
    total = 0
    for window_start, window_end in _night_windows(punch_in, punch_out):
        first = max(0, _ceil_minutes(window_start - punch_in))
        last = min(steps, _ceil_minutes(window_end - punch_in))
        if last > first:
            total += last - first
    return total
