from __future__ import annotations

from datetime import datetime

import mysql.connector
import pytest
from mysql.connector import errorcode

from gym_checkin.checkins.mysql_session_repository import MySQLAttendanceStore
from gym_checkin.core.exceptions import DuplicateOpenSessionError, StoreUnavailableError
from gym_checkin.database.bootstrap import iter_sql_statements
from gym_checkin.database.connection import DBConfig
from gym_checkin.database.mysql_base import db_cursor, is_duplicate_key


class FakeCursor:
    def __init__(self, error: Exception | None = None, rows=None):
        self._error = error
        self._rows = rows or []
        self.lastrowid = 42
        self.executed: list[tuple] = []
        self.closed = False

    def execute(self, sql, params=None):
        self.executed.append((sql, params))
        if self._error is not None:
            raise self._error

    def fetchall(self):
        return self._rows

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn: FakeConnection | None = None, connect_error: Exception | None = None):
        self.conn = conn
        self._connect_error = connect_error

    def connect(self):
        if self._connect_error is not None:
            raise self._connect_error
        return self.conn


def test_db_cursor_commits_and_closes():
    conn = FakeConnection(FakeCursor())

    with db_cursor(FakeFactory(conn)) as (_, cur):
        cur.execute("SELECT 1")

    assert conn.committed and conn.closed
    assert cur.closed


def test_operational_error_becomes_store_unavailable():
    conn = FakeConnection(FakeCursor(mysql.connector.OperationalError(msg="Lost connection", errno=2013)))

    with pytest.raises(StoreUnavailableError):
        with db_cursor(FakeFactory(conn)) as (_, cur):
            cur.execute("SELECT 1")

    assert conn.rolled_back and not conn.committed
    assert conn.closed


def test_connect_failure_becomes_store_unavailable():
    factory = FakeFactory(connect_error=mysql.connector.InterfaceError(msg="Can't connect", errno=2003))

    with pytest.raises(StoreUnavailableError):
        with db_cursor(factory):
            pass


def test_query_errors_are_not_masked():
    conn = FakeConnection(FakeCursor(mysql.connector.ProgrammingError(msg="bad sql", errno=1064)))

    with pytest.raises(mysql.connector.ProgrammingError):
        with db_cursor(FakeFactory(conn)) as (_, cur):
            cur.execute("SELEC 1")

    assert conn.rolled_back


def test_duplicate_open_session_is_mapped():
    dup = mysql.connector.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)
    store = MySQLAttendanceStore(FakeFactory(FakeConnection(FakeCursor(dup))))

    assert is_duplicate_key(dup)
    with pytest.raises(DuplicateOpenSessionError) as exc:
        store.insert_session(member_id=5, opened_at=datetime(2026, 1, 1, 9, 0))
    assert exc.value.member_id == 5


def test_insert_returns_open_session():
    store = MySQLAttendanceStore(FakeFactory(FakeConnection(FakeCursor())))

    session = store.insert_session(member_id=5, opened_at=datetime(2026, 1, 1, 9, 0))

    assert session.session_id == 42
    assert session.is_open


def test_find_open_sessions_maps_rows():
    rows = [{"checkin_id": 3, "member_id": 5, "check_in": datetime(2026, 1, 1, 9, 0), "check_out": None}]
    store = MySQLAttendanceStore(FakeFactory(FakeConnection(FakeCursor(rows=rows))))

    [s] = store.find_open_sessions(5)

    assert s.session_id == 3 and s.is_open


def test_sql_splitter_keeps_semicolons_in_quotes():
    sql = "INSERT INTO t VALUES ('a;b');\nSELECT 1;\n\n"

    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", "SELECT 1"]


def test_db_config_from_settings_mapping():
    cfg = DBConfig.from_mapping({"host": "db", "port": "3307", "user": "app", "password": "pw", "database": "gyms"})

    assert cfg.describe() == "app@db:3307/gyms"
    assert cfg.connect_kwargs()["connection_timeout"] == 10
    assert "database" not in cfg.connect_kwargs(with_database=False)
