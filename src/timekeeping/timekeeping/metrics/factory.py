from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..core.enums import OvernightPolicy
from ..core.exceptions import ValidationError
from .strategies.base import ScheduledMinutesStrategy
from .strategies.naive_strategy import NaiveScheduledMinutes
from .strategies.wraparound_strategy import WrapAroundScheduledMinutes


@dataclass
class ScheduledMinutesFactory:
    """Factory Pattern: choose how scheduled minutes are measured."""

    def for_policy(self, policy: Optional[Union[OvernightPolicy, str]]) -> ScheduledMinutesStrategy:
        if policy is None:
            return NaiveScheduledMinutes()
        try:
            policy = OvernightPolicy(policy)
        except ValueError as exc:
            raise ValidationError(f"Unknown overnight schedule policy: {policy!r}") from exc

        if policy == OvernightPolicy.WRAP_AROUND:
            return WrapAroundScheduledMinutes()
        return NaiveScheduledMinutes()
