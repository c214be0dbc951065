from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Optional

from ..common.datetime_utils import resolve_zone
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..schedules.model import Schedule
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: employee directory and profile updates.

    Profile changes only affect punches measured afterwards; stored metrics
    are rebuilt when an admin edits the punch.
    """

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def list_employees(self, *, current_role: Role) -> list[Employee]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Admin access required")
        return sorted(self._employees.list_all(), key=lambda e: (e.name.lower(), e.user_id))

    def get_profile(self, user_id: str) -> Employee:
        employee = self._employees.get_by_id(user_id)
        if not employee:
            raise NotFoundError("User not found")
        return employee

    def update_profile(
        self,
        user_id: str,
        *,
        name: Optional[str] = None,
        timezone: Optional[str] = None,
        schedule: Any = None,
    ) -> Employee:
        """Change name, time zone and/or schedule; omitted fields stay as they are."""
        employee = self.get_profile(user_id)

        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = require_non_empty(name, "name")
        if timezone is not None:
            if resolve_zone(timezone) is None:
                raise ValidationError("timezone must not be empty")
            changes["timezone"] = timezone
        if schedule is not None:
            changes["schedule"] = Schedule.from_value(schedule)
        if not changes:
            raise ValidationError("Nothing to update: provide name, timezone and/or schedule")

        updated = replace(employee, **changes)
        if not self._employees.save(updated):
            raise NotFoundError("User not found")
        logger.info("Profile of %s updated (%s)", user_id, ", ".join(sorted(changes)))
        return updated
