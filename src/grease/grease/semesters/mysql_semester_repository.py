from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchone
from .model import Semester
from .repository import SemesterRepository


def _to_semester(r: dict) -> Semester:
    return Semester(
        name=r["name"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        current=as_bool(r["current"]),
    )


class MySQLSemesterRepository(SemesterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_current(self) -> Optional[Semester]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT name, start_date, end_date, current FROM semester WHERE current = TRUE LIMIT 1")
            r = fetchone(cur)
            return _to_semester(r) if r else None

    def get_by_name(self, name: str) -> Optional[Semester]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT name, start_date, end_date, current FROM semester WHERE name=%s", (name,))
            r = fetchone(cur)
            return _to_semester(r) if r else None
