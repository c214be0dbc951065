from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization checks."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class PunchStatus(str, Enum):
    """Lifecycle of a punch record."""

    ACTIVE = "active"
    COMPLETED = "completed"


class OvernightPolicy(str, Enum):
    """How the scheduled span of an overnight schedule (end < start) is measured."""

    NAIVE = "naive"
    WRAP_AROUND = "wrap_around"
