from __future__ import annotations

import logging

from werkzeug.security import check_password_hash

from ..core.exceptions import AuthenticationError, NotFoundError
from ..semesters.repository import SemesterRepository
from .model import Member, Principal
from .repository import MemberRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: log in and resolve the acting principal of a request."""

    def __init__(self, members: MemberRepository, semesters: SemesterRepository):
        self._members = members
        self._semesters = semesters

    def authenticate(self, email: str, password: str) -> Principal:
        member = self._members.get_by_email((email or "").strip())
        if not member:
            raise AuthenticationError("Wrong email or password")

        try:
            ok = check_password_hash(member.pass_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Wrong email or password")

        logger.info("%s logged in", member.email)
        return self._principal_for(member)

    def load_principal(self, email: str) -> Principal:
        member = self._members.get_by_email(email)
        if not member:
            raise AuthenticationError("Your session refers to an unknown member; please log in again")
        return self._principal_for(member)

    def _principal_for(self, member: Member) -> Principal:
        current = self._semesters.get_current()
        active = self._members.get_active_semester(member.email, current.name) if current else None
        return Principal(member=member, roles=tuple(self._members.get_roles(member.email)), active_semester=active)


class MemberService:
    def __init__(self, members: MemberRepository):
        self._members = members

    def get_member(self, email: str) -> Member:
        member = self._members.get_by_email(email)
        if not member:
            raise NotFoundError(f"No member with the email {email}.")
        return member
