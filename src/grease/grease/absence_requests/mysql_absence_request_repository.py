from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.enums import AbsenceRequestStatus
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AbsenceRequest
from .repository import AbsenceRequestRepository


def _to_request(r: dict) -> AbsenceRequest:
    return AbsenceRequest(
        member=r["member"],
        event_id=int(r["event"]),
        time=r["time"],
        reason=r["reason"],
        status=AbsenceRequestStatus(r["state"]),
    )


class MySQLAbsenceRequestRepository(AbsenceRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, member: str, event_id: int) -> Optional[AbsenceRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT member, event, time, reason, state FROM absence_request WHERE member=%s AND event=%s",
                (member, int(event_id)),
            )
            r = fetchone(cur)
            return _to_request(r) if r else None

    def create(self, *, member: str, event_id: int, reason: str, time: datetime) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO absence_request(member, event, time, reason, state)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (member, int(event_id), time, reason, AbsenceRequestStatus.PENDING.value),
                )
            except mysql.connector.IntegrityError as exc:
                if exc.errno != errorcode.ER_DUP_ENTRY:
                    raise
                raise ValidationError(f"{member} has already submitted an absence request for event {event_id}.") from exc

    def list_for_event(self, event_id: int) -> Sequence[AbsenceRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT member, event, time, reason, state FROM absence_request WHERE event=%s",
                (int(event_id),),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def list_for_semester(self, semester: str) -> Sequence[AbsenceRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT ar.member, ar.event, ar.time, ar.reason, ar.state
                FROM absence_request ar
                JOIN event e ON e.id = ar.event
                WHERE e.semester=%s
                ORDER BY ar.time DESC
                """,
                (semester,),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def decide(self, *, member: str, event_id: int, status: AbsenceRequestStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE absence_request SET state=%s WHERE member=%s AND event=%s AND state=%s",
                (status.value, member, int(event_id), AbsenceRequestStatus.PENDING.value),
            )
            return cur.rowcount > 0
