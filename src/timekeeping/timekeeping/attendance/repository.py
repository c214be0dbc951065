from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import PunchRecord


class PunchRepository(Protocol):
    def get_by_id(self, punch_id: str) -> Optional[PunchRecord]:
        raise NotImplementedError

    def get_open_for_user(self, user_id: str) -> Optional[PunchRecord]:
        """The user's punch with no punch-out yet, if any."""

        raise NotImplementedError

    def list_for_user(self, user_id: str) -> Sequence[PunchRecord]:
        raise NotImplementedError

    def list_for_date(self, work_date: date, *, user_id: Optional[str] = None) -> Sequence[PunchRecord]:
        raise NotImplementedError

    def list_completed_for_user_and_date(self, user_id: str, work_date: date) -> Sequence[PunchRecord]:
        raise NotImplementedError

    def create_punch_in(self, *, user_id: str, work_date: date, punch_in: datetime) -> PunchRecord:
        raise NotImplementedError

    def save(self, record: PunchRecord) -> None:
        """Overwrite the stored record with the same punch_id."""

        raise NotImplementedError

    def delete(self, punch_id: str) -> bool:
        raise NotImplementedError
