from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..core.constants import DEFAULT_SCHEDULE_END, DEFAULT_SCHEDULE_START, MINUTES_PER_DAY
from ..core.exceptions import ValidationError
from ..metrics.time_of_day import format_minutes, parse_time_to_minutes


@dataclass(frozen=True)
class Schedule:
    """An employee's expected start/end, in minutes since midnight.

    ``end < start`` marks an overnight schedule (e.g. 22:00-06:00).
    """

    start: int
    end: int

    def __post_init__(self):
        for name in ("start", "end"):
            value = getattr(self, name)
            if not 0 <= value < MINUTES_PER_DAY:
                raise ValidationError(f"Schedule {name} out of range: {value}")

    @property
    def is_overnight(self) -> bool:
        return self.end < self.start

    @classmethod
    def from_strings(cls, start: str, end: str) -> "Schedule":
        return cls(start=parse_time_to_minutes(start), end=parse_time_to_minutes(end))

    @classmethod
    def from_value(cls, value: Any) -> "Schedule":
        """Accept a Schedule or a ``{"start": "HH:MM", "end": "HH:MM"}`` mapping."""
        if isinstance(value, Schedule):
            return value
        if isinstance(value, Mapping):
            if "start" not in value or "end" not in value:
                raise ValidationError("Schedule requires 'start' and 'end'")
            return cls.from_strings(value["start"], value["end"])
        raise ValidationError(f"Invalid schedule: {value!r}")

    def to_dict(self) -> dict:
        return {"start": format_minutes(self.start), "end": format_minutes(self.end)}


def default_schedule(start: str = DEFAULT_SCHEDULE_START, end: str = DEFAULT_SCHEDULE_END) -> Schedule:
    """Schedule used for employees who have none on file."""
    return Schedule.from_strings(start, end)
