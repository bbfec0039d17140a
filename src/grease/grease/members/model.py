from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Enrollment


@dataclass(frozen=True)
class Member:
    """Domain entity: a member of the organization.

    Only ``email`` matters for security; the rest is profile data.
    """

    email: str
    first_name: str
    last_name: str
    pass_hash: str = ""
    preferred_name: Optional[str] = None
    phone_number: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.preferred_name or self.first_name} {self.last_name}"

    def to_json(self) -> dict:
        return {
            "email": self.email,
            "firstName": self.first_name,
            "preferredName": self.preferred_name,
            "lastName": self.last_name,
            "fullName": self.full_name,
            "phoneNumber": self.phone_number,
        }


@dataclass(frozen=True)
class ActiveSemester:
    """A member's enrollment for one semester; the section may be unset."""

    member: str
    semester: str
    enrollment: Enrollment
    section: Optional[str] = None


@dataclass(frozen=True)
class Principal:
    """The acting member for one request, with the roles they currently hold."""

    member: Member
    roles: tuple[str, ...] = ()
    active_semester: Optional[ActiveSemester] = None

    @property
    def email(self) -> str:
        return self.member.email

    @property
    def section(self) -> Optional[str]:
        return self.active_semester.section if self.active_semester else None
