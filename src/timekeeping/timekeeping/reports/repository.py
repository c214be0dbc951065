from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import DailySummary


class DailySummaryRepository(Protocol):
    def get(self, user_id: str, work_date: date) -> Optional[DailySummary]:
        raise NotImplementedError

    def upsert(self, summary: DailySummary) -> None:
        """Replace the summary stored for (user_id, work_date)."""

        raise NotImplementedError

    def list_range(self, *, start: date, end: date, user_id: Optional[str] = None) -> Sequence[DailySummary]:
        """Summaries with ``start <= work_date <= end``, optionally for one user."""

        raise NotImplementedError
