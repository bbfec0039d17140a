from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import GigRequestStatus
from .model import GigRequest, NewGigRequest


class GigRequestRepository(Protocol):
    def get(self, request_id: int) -> Optional[GigRequest]:
        raise NotImplementedError

    def create(self, request: NewGigRequest, *, time: datetime) -> int:
        raise NotImplementedError

    def list_all(self) -> Sequence[GigRequest]:
        """Every request ever placed, ordered by submission time."""

        raise NotImplementedError

    def list_since_or_pending(self, since: datetime) -> Sequence[GigRequest]:
        """Requests submitted at or after ``since`` plus older ones still PENDING, ordered by time."""

        raise NotImplementedError

    def set_status(self, request_id: int, *, status: GigRequestStatus, expected: GigRequestStatus) -> bool:
        """Compare-and-set the status; False when the request was not in ``expected``."""

        raise NotImplementedError
