from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import GigRequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import GigRequest, NewGigRequest
from .repository import GigRequestRepository

_COLUMNS = """
    id, time, name, organization, event, contact_name, contact_email,
    contact_phone, start_time, location, comments, status
"""


def _to_request(r: dict) -> GigRequest:
    return GigRequest(
        request_id=int(r["id"]),
        time=r["time"],
        name=r["name"],
        organization=r["organization"],
        contact_name=r["contact_name"],
        contact_email=r["contact_email"],
        contact_phone=r["contact_phone"],
        start_time=r["start_time"],
        location=r["location"],
        comments=r.get("comments"),
        event=int(r["event"]) if r.get("event") is not None else None,
        status=GigRequestStatus(r["status"]),
    )


class MySQLGigRequestRepository(GigRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, request_id: int) -> Optional[GigRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM gig_request WHERE id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def create(self, request: NewGigRequest, *, time: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO gig_request(
                    time, name, organization, contact_name, contact_email,
                    contact_phone, start_time, location, comments, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    time,
                    request.name,
                    request.organization,
                    request.contact_name,
                    request.contact_email,
                    request.contact_phone,
                    request.start_time,
                    request.location,
                    request.comments,
                    GigRequestStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def list_all(self) -> Sequence[GigRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM gig_request ORDER BY time")
            return [_to_request(r) for r in fetchall(cur)]

    def list_since_or_pending(self, since: datetime) -> Sequence[GigRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM gig_request WHERE time >= %s OR status = %s ORDER BY time",
                (since, GigRequestStatus.PENDING.value),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def set_status(self, request_id: int, *, status: GigRequestStatus, expected: GigRequestStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE gig_request SET status=%s WHERE id=%s AND status=%s",
                (status.value, int(request_id), expected.value),
            )
            return cur.rowcount > 0
