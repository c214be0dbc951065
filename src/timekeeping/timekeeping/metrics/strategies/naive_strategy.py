from __future__ import annotations

from ...schedules.model import Schedule
from .base import ScheduledMinutesStrategy


class NaiveScheduledMinutes(ScheduledMinutesStrategy):
    """Plain ``end - start``. Negative for overnight schedules."""

    def scheduled_minutes(self, schedule: Schedule) -> int:
        return schedule.end - schedule.start
