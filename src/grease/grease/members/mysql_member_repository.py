from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Enrollment
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ActiveSemester, Member
from .repository import MemberRepository

_MEMBER_COLUMNS = "m.email, m.first_name, m.preferred_name, m.last_name, m.pass_hash, m.phone_number"


def _to_member(r: dict) -> Member:
    return Member(
        email=r["email"],
        first_name=r["first_name"],
        preferred_name=r.get("preferred_name"),
        last_name=r["last_name"],
        pass_hash=r.get("pass_hash") or "",
        phone_number=r.get("phone_number") or "",
    )


def _to_active_semester(r: dict) -> ActiveSemester:
    return ActiveSemester(
        member=r["member"],
        semester=r["semester"],
        enrollment=Enrollment(r["enrollment"]),
        section=r.get("section"),
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_MEMBER_COLUMNS} FROM member m WHERE m.email=%s", (email,))
            r = fetchone(cur)
            return _to_member(r) if r else None

    def get_active_semester(self, email: str, semester: str) -> Optional[ActiveSemester]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT member, semester, enrollment, section
                FROM active_semester
                WHERE member=%s AND semester=%s
                """,
                (email, semester),
            )
            r = fetchone(cur)
            return _to_active_semester(r) if r else None

    def list_active_for_semester(self, semester: str) -> Sequence[tuple[Member, ActiveSemester]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_MEMBER_COLUMNS}, a.member, a.semester, a.enrollment, a.section
                FROM active_semester a
                JOIN member m ON m.email = a.member
                WHERE a.semester=%s
                ORDER BY m.last_name, m.first_name
                """,
                (semester,),
            )
            return [(_to_member(r), _to_active_semester(r)) for r in fetchall(cur)]

    def get_roles(self, email: str) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT mr.role
                FROM member_role mr
                JOIN role r ON r.name = mr.role
                WHERE mr.member=%s
                ORDER BY r.`rank`
                """,
                (email,),
            )
            return [r["role"] for r in fetchall(cur)]
