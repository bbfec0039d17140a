from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, as_optional_bool, db_cursor, fetchall, fetchone
from .model import Attendance
from .repository import AttendanceRepository

_COLUMNS = "member, event, rsvp, confirmed, excused, did_attend, minutes_late"


def _to_attendance(r: dict) -> Attendance:
    return Attendance(
        member=r["member"],
        event_id=int(r["event"]),
        rsvp=as_optional_bool(r.get("rsvp")),
        confirmed=as_bool(r.get("confirmed")),
        excused=as_bool(r.get("excused")),
        did_attend=as_bool(r.get("did_attend")),
        minutes_late=int(r.get("minutes_late") or 0),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, event_id: int, member: str) -> Optional[Attendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE event=%s AND member=%s", (int(event_id), member))
            r = fetchone(cur)
            return _to_attendance(r) if r else None

    def list_for_event(self, event_id: int) -> Sequence[Attendance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE event=%s", (int(event_id),))
            return [_to_attendance(r) for r in fetchall(cur)]

    def save(self, record: Attendance) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO attendance({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    rsvp=VALUES(rsvp), confirmed=VALUES(confirmed), excused=VALUES(excused),
                    did_attend=VALUES(did_attend), minutes_late=VALUES(minutes_late)
                """,
                (
                    record.member,
                    int(record.event_id),
                    record.rsvp,
                    bool(record.confirmed),
                    bool(record.excused),
                    bool(record.did_attend),
                    int(record.minutes_late),
                ),
            )

    def excuse_members(self, *, event_id: int, members: Sequence[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            for member in members:
                cur.execute(
                    """
                    INSERT INTO attendance(member, event, excused)
                    VALUES(%s,%s,TRUE)
                    ON DUPLICATE KEY UPDATE excused=TRUE
                    """,
                    (member, int(event_id)),
                )
        return len(members)
