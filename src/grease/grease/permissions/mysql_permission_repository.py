from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import PermissionKind
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Permission, Role, RolePermissionRow
from .repository import PermissionRepository


class MySQLPermissionRepository(PermissionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_permissions(self) -> Sequence[Permission]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT name, description, type FROM permission ORDER BY name")
            return [
                Permission(name=r["name"], kind=PermissionKind(r["type"]), description=r.get("description"))
                for r in fetchall(cur)
            ]

    def list_event_types(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT name FROM event_type ORDER BY name")
            return [r["name"] for r in fetchall(cur)]

    def list_sections(self) -> Sequence[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT name FROM section_type ORDER BY name")
            return [r["name"] for r in fetchall(cur)]

    def list_roles(self) -> Sequence[Role]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT name, `rank`, max_quantity FROM role ORDER BY `rank`")
            return [
                Role(name=r["name"], rank=int(r["rank"]), max_quantity=int(r["max_quantity"]))
                for r in fetchall(cur)
            ]

    def list_role_permissions(self) -> Sequence[RolePermissionRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT role, permission, event_type FROM role_permission ORDER BY role, permission")
            return [
                RolePermissionRow(role=r["role"], permission=r["permission"], event_type=r.get("event_type"))
                for r in fetchall(cur)
            ]

    def add_role_permission(self, *, role: str, permission: str, event_type: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id FROM role_permission
                WHERE role=%s AND permission=%s AND event_type <=> %s
                """,
                (role, permission, event_type),
            )
            if fetchone(cur):
                return False

            cur.execute(
                "INSERT INTO role_permission(role, permission, event_type) VALUES(%s,%s,%s)",
                (role, permission, event_type),
            )
            return True

    def remove_role_permission(self, *, role: str, permission: str, event_type: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM role_permission WHERE role=%s AND permission=%s AND event_type <=> %s",
                (role, permission, event_type),
            )
            return cur.rowcount > 0
