from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for employees.

    Note (DIP): services depend on this interface, never on a concrete store.
    """

    def get_by_id(self, user_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_by_ids(self, user_ids: Sequence[str]) -> Sequence[Employee]:
        """Employees that exist among ``user_ids``; unknown ids are skipped."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def save(self, employee: Employee) -> bool:
        """Replace the stored employee; False when ``user_id`` is unknown."""

        raise NotImplementedError
