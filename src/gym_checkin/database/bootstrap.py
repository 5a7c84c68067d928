from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig


def _connect(config: DBConfig, *, with_database: bool = True):
    return mysql.connector.connect(**config.connect_kwargs(with_database=with_database))


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterable[str]:
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
    for stmt in iter_sql_statements(sql):
        cur.execute(stmt)


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_mapping(db_config)
    conn = _connect(config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _apply_sql_file(db_config, Path(schema_path))


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _apply_sql_file(db_config, Path(seed_path))


def _apply_sql_file(db_config: dict, path: Path) -> None:
    sql = _strip_create_db_and_use(path.read_text(encoding="utf-8"))
    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor()
        _exec_sql(cur, sql)
        conn.commit()
    finally:
        conn.close()


DEMO_PASSWORDS = {
    "owner@demo.gym": "owner123",
    "staff@demo.gym": "staff123",
    "member@demo.gym": "member123",
}


def ensure_demo_users(db_config: dict) -> list[str]:
    """Give the seeded demo accounts real password hashes.

    seed.sql inserts placeholder hashes; this rewrites them so the demo logins work.
    """

    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor(dictionary=True)

        updated: list[str] = []
        for email, password in DEMO_PASSWORDS.items():
            cur.execute(
                "UPDATE users SET password_hash=%s, is_active=1 WHERE email=%s",
                (generate_password_hash(password), email),
            )
            if cur.rowcount:
                updated.append(email)

        conn.commit()
        return updated
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
