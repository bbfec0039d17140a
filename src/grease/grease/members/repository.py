from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import ActiveSemester, Member


class MemberRepository(Protocol):
    """Repository interface for members and their semester enrollment.

    Note (DIP): services depend on this interface, never on a concrete database.
    """

    def get_by_email(self, email: str) -> Optional[Member]:
        raise NotImplementedError

    def get_active_semester(self, email: str, semester: str) -> Optional[ActiveSemester]:
        raise NotImplementedError

    def list_active_for_semester(self, semester: str) -> Sequence[tuple[Member, ActiveSemester]]:
        """Members enrolled for ``semester``, ordered by last then first name."""

        raise NotImplementedError

    def get_roles(self, email: str) -> Sequence[str]:
        raise NotImplementedError
