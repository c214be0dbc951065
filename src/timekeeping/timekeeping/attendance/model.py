from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import PunchStatus
from ..metrics.model import PunchMetrics


@dataclass(frozen=True)
class PunchRecord:
    """Domain entity: one punch-in/punch-out session.

    ``punch_out`` and ``metrics`` stay None while the punch is open.
    """

    punch_id: str
    user_id: str
    work_date: date
    punch_in: datetime
    punch_out: Optional[datetime]
    status: PunchStatus
    metrics: Optional[PunchMetrics] = None
    edited_by_admin: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.punch_id,
            "userId": self.user_id,
            "date": self.work_date.isoformat(),
            "punchIn": to_iso(self.punch_in),
            "punchOut": to_iso(self.punch_out) if self.punch_out else None,
            "status": self.status.value,
            "metrics": self.metrics.to_dict() if self.metrics else None,
            "editedByAdmin": self.edited_by_admin,
        }


@dataclass(frozen=True)
class PunchStatusView:
    """Read-model for "am I punched in?"."""

    is_punched_in: bool
    current_punch: Optional[PunchRecord] = None
    elapsed_minutes: Optional[int] = None

    def to_dict(self) -> dict:
        current = None
        if self.current_punch:
            current = {"punchId": self.current_punch.punch_id, "punchIn": to_iso(self.current_punch.punch_in)}
            if self.elapsed_minutes is not None:
                current["elapsedMinutes"] = self.elapsed_minutes
        return {"isPunchedIn": self.is_punched_in, "currentPunch": current}
