from __future__ import annotations

from abc import ABC, abstractmethod

from ...schedules.model import Schedule


class ScheduledMinutesStrategy(ABC):
    """Strategy Pattern: how long a schedule is, in minutes."""

    @abstractmethod
    def scheduled_minutes(self, schedule: Schedule) -> int:
        raise NotImplementedError
