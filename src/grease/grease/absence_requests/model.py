from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import AbsenceRequestStatus


@dataclass(frozen=True)
class AbsenceRequest:
    """A member's request to be excused from one event. At most one per (member, event)."""

    member: str
    event_id: int
    time: datetime
    reason: str
    status: AbsenceRequestStatus = AbsenceRequestStatus.PENDING

    @property
    def is_decided(self) -> bool:
        return self.status != AbsenceRequestStatus.PENDING

    def to_json(self) -> dict:
        return {
            "member": self.member,
            "event": self.event_id,
            "time": self.time.isoformat(),
            "reason": self.reason,
            "state": self.status.value,
        }
