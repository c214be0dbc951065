from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable

from .duration import Duration, to_duration
from .model import METRIC_FIELDS, METRIC_KEYS, PeriodAggregate


def _field_minutes(record: Any, name: str) -> int:
    if isinstance(record, Mapping):
        value = record.get(METRIC_KEYS[name])
    else:
        value = getattr(record, name, None)
    return Duration.from_value(value).total_minutes


def aggregate_metrics(records: Iterable[Any]) -> PeriodAggregate:
    """Sum the six metric fields across ``records``.

    Works on per-punch metrics (daily totals) and on daily aggregates
    (weekly totals) alike. Records may be dataclasses or stored JSON
    mappings; missing fields count as zero.
    """
    records = list(records)
    totals = {name: 0 for name in METRIC_FIELDS}
    for record in records:
        for name in METRIC_FIELDS:
            totals[name] += _field_minutes(record, name)

    return PeriodAggregate(
        count=len(records),
        **{name: to_duration(minutes) for name, minutes in totals.items()},
    )
