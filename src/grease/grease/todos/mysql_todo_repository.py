from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import Todo
from .repository import TodoRepository


def _to_todo(r: dict) -> Todo:
    return Todo(
        todo_id=int(r["id"]),
        text=r["text"],
        member=r["member"],
        completed=as_bool(r.get("completed")),
    )


class MySQLTodoRepository(TodoRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, todo_id: int) -> Optional[Todo]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, text, member, completed FROM todo WHERE id=%s", (int(todo_id),))
            r = fetchone(cur)
            return _to_todo(r) if r else None

    def list_incomplete_for_member(self, member: str) -> Sequence[Todo]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, text, member, completed FROM todo WHERE member=%s AND completed=FALSE ORDER BY id",
                (member,),
            )
            return [_to_todo(r) for r in fetchall(cur)]

    def create_for_members(self, *, text: str, members: Sequence[str]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            for member in members:
                cur.execute(
                    "INSERT INTO todo(text, member, completed) VALUES(%s,%s,FALSE)",
                    (text, member),
                )
        return len(members)

    def mark_complete(self, todo_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE todo SET completed=TRUE WHERE id=%s", (int(todo_id),))
            return cur.rowcount > 0
