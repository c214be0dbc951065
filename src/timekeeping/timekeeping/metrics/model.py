from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

from ..common.datetime_utils import parse_instant, to_iso
from .duration import Duration

METRIC_FIELDS = ("total_worked", "regular", "overtime", "night_differential", "late", "undertime")

# Wire names, as stored on punch and summary documents.
METRIC_KEYS = {
    "total_worked": "totalWorked",
    "regular": "regular",
    "overtime": "overtime",
    "night_differential": "nightDifferential",
    "late": "late",
    "undertime": "undertime",
}


def _durations_to_dict(record) -> dict:
    return {METRIC_KEYS[name]: getattr(record, name).to_dict() for name in METRIC_FIELDS}


def _durations_from_mapping(data: Mapping[str, Any]) -> dict:
    return {name: Duration.from_value(data.get(METRIC_KEYS[name])) for name in METRIC_FIELDS}


@dataclass(frozen=True)
class PunchMetrics:
    """Metrics for one closed punch. Recomputed wholesale, never patched."""

    total_worked: Duration
    regular: Duration
    overtime: Duration
    night_differential: Duration
    late: Duration
    undertime: Duration
    punch_in: datetime
    punch_out: datetime

    def to_dict(self) -> dict:
        data = _durations_to_dict(self)
        data["punchIn"] = to_iso(self.punch_in)
        data["punchOut"] = to_iso(self.punch_out)
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PunchMetrics":
        return cls(
            punch_in=parse_instant(data["punchIn"]),
            punch_out=parse_instant(data["punchOut"]),
            **_durations_from_mapping(data),
        )


@dataclass(frozen=True)
class PeriodAggregate:
    """Field-wise sum of metrics over a day or a week, plus how many records went in."""

    total_worked: Duration
    regular: Duration
    overtime: Duration
    night_differential: Duration
    late: Duration
    undertime: Duration
    count: int

    def to_dict(self, *, count_key: str = "punchCount") -> dict:
        data = _durations_to_dict(self)
        data[count_key] = self.count
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, count_key: str = "punchCount") -> "PeriodAggregate":
        return cls(count=int(data.get(count_key) or 0), **_durations_from_mapping(data))
