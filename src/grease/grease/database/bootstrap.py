from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from ..core.constants import DEFAULT_EVENT_TYPES, DEFAULT_SECTIONS, EVENT_PERMISSIONS, STATIC_PERMISSIONS
from ..core.enums import PermissionKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DBTarget:
    host: str
    port: int
    user: str
    password: str
    database: str


def _as_target(db_config: dict) -> DBTarget:
    return DBTarget(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "grease")),
    )


def _connect(target: DBTarget, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema/seed files (handles ';' inside quotes).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_sql(cur, sql: str) -> None:
    for stmt in _iter_sql_statements(sql):
        cur.execute(stmt)


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        _exec_sql(cur, sql)
        conn.commit()
    finally:
        conn.close()
    logger.info("schema applied from %s", schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    sql = _strip_create_db_and_use(Path(seed_path).read_text(encoding="utf-8"))

    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        _exec_sql(cur, sql)
        conn.commit()
    finally:
        conn.close()
    logger.info("seed applied from %s", seed_path)


def ensure_catalog(db_config: dict) -> None:
    """Insert the known permissions, event types and sections (idempotent)."""
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        for name in EVENT_PERMISSIONS:
            cur.execute(
                "INSERT IGNORE INTO permission(name, type) VALUES(%s,%s)",
                (name, PermissionKind.EVENT.value),
            )
        for name in STATIC_PERMISSIONS:
            cur.execute(
                "INSERT IGNORE INTO permission(name, type) VALUES(%s,%s)",
                (name, PermissionKind.STATIC.value),
            )
        for name in DEFAULT_EVENT_TYPES:
            cur.execute("INSERT IGNORE INTO event_type(name) VALUES(%s)", (name,))
        for name in DEFAULT_SECTIONS:
            cur.execute("INSERT IGNORE INTO section_type(name) VALUES(%s)", (name,))
        conn.commit()
    finally:
        conn.close()


def ensure_demo_members(db_config: dict) -> None:
    """Create a demo president account holding every permission generally."""
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor(dictionary=True)

        cur.execute("INSERT IGNORE INTO role(name, `rank`, max_quantity) VALUES(%s,%s,%s)", ("President", 1, 1))
        cur.execute("SELECT email FROM member WHERE email=%s", ("president@example.com",))
        if cur.fetchone():
            cur.execute(
                "UPDATE member SET pass_hash=%s WHERE email=%s",
                (generate_password_hash("president123"), "president@example.com"),
            )
        else:
            cur.execute(
                """
                INSERT INTO member(email, first_name, last_name, pass_hash, phone_number)
                VALUES(%s,%s,%s,%s,%s)
                """,
                ("president@example.com", "Demo", "President", generate_password_hash("president123"), ""),
            )
        cur.execute("INSERT IGNORE INTO member_role(member, role) VALUES(%s,%s)", ("president@example.com", "President"))
        for name in EVENT_PERMISSIONS + STATIC_PERMISSIONS:
            cur.execute(
                """
                INSERT INTO role_permission(role, permission, event_type)
                SELECT %s, %s, NULL FROM DUAL
                WHERE NOT EXISTS (
                    SELECT 1 FROM role_permission WHERE role=%s AND permission=%s AND event_type IS NULL
                )
                """,
                ("President", name, "President", name),
            )

        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
