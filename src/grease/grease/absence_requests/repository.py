from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AbsenceRequestStatus
from .model import AbsenceRequest


class AbsenceRequestRepository(Protocol):
    def get(self, *, member: str, event_id: int) -> Optional[AbsenceRequest]:
        raise NotImplementedError

    def create(self, *, member: str, event_id: int, reason: str, time: datetime) -> None:
        """Insert a PENDING request. Raises ``ValidationError`` if one already exists."""

        raise NotImplementedError

    def list_for_event(self, event_id: int) -> Sequence[AbsenceRequest]:
        raise NotImplementedError

    def list_for_semester(self, semester: str) -> Sequence[AbsenceRequest]:
        """Requests for events of ``semester``, newest first."""

        raise NotImplementedError

    def decide(self, *, member: str, event_id: int, status: AbsenceRequestStatus) -> bool:
        """Move a PENDING request to ``status``; False if it was not pending any more."""

        raise NotImplementedError
