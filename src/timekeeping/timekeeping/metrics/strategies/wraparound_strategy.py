from __future__ import annotations

from ...core.constants import MINUTES_PER_DAY
from ...schedules.model import Schedule
from .base import ScheduledMinutesStrategy


class WrapAroundScheduledMinutes(ScheduledMinutesStrategy):
    """Overnight schedules end on the next day: 22:00-06:00 is 480 minutes."""

    def scheduled_minutes(self, schedule: Schedule) -> int:
        return (schedule.end - schedule.start) % MINUTES_PER_DAY
