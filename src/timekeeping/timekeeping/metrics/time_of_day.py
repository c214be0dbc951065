"""Time-of-day handling: 24-hour HH:MM strings <-> minutes since midnight."""
from __future__ import annotations

import re

from ..core.constants import MINUTES_PER_DAY, MINUTES_PER_HOUR
from ..core.exceptions import FormatError

TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time_to_minutes(value: str) -> int:
    """Parse ``HH:MM`` (24-hour) into minutes since midnight.

    Raises FormatError for a wrong separator, non-numeric fields, or an
    hour/minute out of range.
    """
    if not isinstance(value, str):
        raise FormatError(f"Time must be an HH:MM string, got {value!r}")

    m = TIME_RE.match(value.strip())
    if not m:
        raise FormatError(f"Time must be in HH:MM format, got {value!r}")

    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23 or minutes > 59:
        raise FormatError(f"Time out of range: {value!r}")
    return hours * MINUTES_PER_HOUR + minutes


def format_minutes(minutes: int) -> str:
    """Minutes since midnight to HH:MM. Values past midnight wrap (1470 -> 00:30)."""
    h, mn = divmod(int(minutes) % MINUTES_PER_DAY, MINUTES_PER_HOUR)
    return f"{h:02d}:{mn:02d}"
