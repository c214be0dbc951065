from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError

Instant = Union[datetime, str]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid date: {value!r}") from exc


def parse_instant(value: Instant) -> datetime:
    """Accept a datetime or an ISO-8601 string (a trailing ``Z`` means UTC)."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Invalid timestamp: {value!r}")

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(f"Invalid timestamp: {value!r}") from exc


def to_local(value: datetime, tz: Optional[tzinfo]) -> datetime:
    """Express an instant on the wall clock of ``tz``.

    Naive values are taken as already being in ``tz``. Without ``tz`` the
    value is returned unchanged.
    """
    if tz is None:
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def resolve_zone(value: Union[str, tzinfo, None]) -> Optional[tzinfo]:
    """IANA zone name (or a ready tzinfo) to a tzinfo; empty means no zone."""
    if value is None or isinstance(value, tzinfo):
        return value
    name = str(value).strip()
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValidationError(f"Unknown time zone: {value!r}") from exc


def to_iso(value: datetime) -> str:
    """ISO-8601 rendering; aware values are normalized to UTC with a ``Z`` suffix."""
    if value.tzinfo is None:
        return value.isoformat()
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def week_start(day: date) -> date:
    """Sunday on or before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def now_local(tz: Optional[tzinfo] = None) -> datetime:
    """Current time, in ``tz`` when given.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(tz)
