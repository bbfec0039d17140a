from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Attendance


class AttendanceRepository(Protocol):
    def get(self, *, event_id: int, member: str) -> Optional[Attendance]:
        raise NotImplementedError

    def list_for_event(self, event_id: int) -> Sequence[Attendance]:
        raise NotImplementedError

    def save(self, record: Attendance) -> None:
        """Insert the record, or overwrite the stored one for the same (member, event)."""

        raise NotImplementedError

    def excuse_members(self, *, event_id: int, members: Sequence[str]) -> int:
        """Mark every listed member excused for the event, all or nothing."""

        raise NotImplementedError
