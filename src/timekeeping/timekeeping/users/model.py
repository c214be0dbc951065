from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional, Union

from ..common.datetime_utils import resolve_zone
from ..core.enums import Role
from ..schedules.model import Schedule


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee whose punches are measured.

    ``timezone`` is an IANA name such as ``"Asia/Manila"`` (a tzinfo is
    accepted as well). Employees without one are measured on the configured
    default zone.

    Note: Plain data object (no storage access code).
    """

    user_id: str
    name: str
    email: str
    role: Role = Role.EMPLOYEE
    schedule: Optional[Schedule] = None
    timezone: Union[str, tzinfo, None] = None

    def zone(self, default: Optional[tzinfo] = None) -> Optional[tzinfo]:
        return resolve_zone(self.timezone) or default

    def to_dict(self) -> dict:
        tz = self.timezone
        return {
            "uid": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "timezone": tz if tz is None or isinstance(tz, str) else str(tz),
            "schedule": self.schedule.to_dict() if self.schedule else None,
        }
