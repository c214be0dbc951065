from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from ..core.constants import MINUTES_PER_HOUR
from ..core.exceptions import NegativeDurationError


@dataclass(frozen=True)
class Duration:
    """A whole-minute span split into hours and leftover minutes.

    ``hours * 60 + minutes == total_minutes`` always holds for values built
    with :func:`to_duration`.
    """

    hours: int
    minutes: int
    total_minutes: int

    def to_dict(self) -> dict:
        return {"hours": self.hours, "minutes": self.minutes, "totalMinutes": self.total_minutes}

    @classmethod
    def from_value(cls, value: Any) -> "Duration":
        """Read a Duration from a Duration, a JSON-shaped mapping, or None.

        Stored records are not always fully populated: None or a mapping
        without ``totalMinutes`` is read as zero / rebuilt from hours+minutes.
        """
        if value is None:
            return ZERO
        if isinstance(value, Duration):
            return value
        if isinstance(value, Mapping):
            total = value.get("totalMinutes")
            if total is None:
                total = int(value.get("hours") or 0) * MINUTES_PER_HOUR + int(value.get("minutes") or 0)
            return to_duration(int(total))
        raise TypeError(f"Cannot read a duration from {type(value).__name__}")


def to_duration(total_minutes: int) -> Duration:
    total_minutes = int(total_minutes)
    if total_minutes < 0:
        raise NegativeDurationError(f"Duration cannot be negative: {total_minutes} minutes")
    hours, minutes = divmod(total_minutes, MINUTES_PER_HOUR)
    return Duration(hours=hours, minutes=minutes, total_minutes=total_minutes)


def format_duration(duration: Optional[Any]) -> str:
    """Render as ``"{hours}h {minutes}m"``; a missing duration renders ``"0h 0m"``."""
    if not duration:
        return "0h 0m"
    if isinstance(duration, Mapping):
        return f"{duration.get('hours', 0)}h {duration.get('minutes', 0)}m"
    return f"{duration.hours}h {duration.minutes}m"


ZERO = Duration(hours=0, minutes=0, total_minutes=0)
