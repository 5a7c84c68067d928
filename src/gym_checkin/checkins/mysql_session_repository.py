from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.exceptions import DuplicateOpenSessionError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, is_duplicate_key
from .model import AttendanceSession
from .repository import AttendanceStore


def _to_session(r: Dict[str, Any]) -> AttendanceSession:
    return AttendanceSession(
        session_id=int(r["checkin_id"]),
        member_id=int(r["member_id"]),
        check_in=r["check_in"],
        check_out=r.get("check_out"),
    )


class MySQLAttendanceStore(AttendanceStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_open_sessions(self, member_id: int) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT checkin_id, member_id, check_in, check_out
                FROM checkins
                WHERE member_id=%s AND check_out IS NULL
                ORDER BY check_in DESC, checkin_id DESC
                """,
                (int(member_id),),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def insert_session(self, *, member_id: int, opened_at: datetime) -> AttendanceSession:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO checkins(member_id, check_in, check_out) VALUES(%s,%s,NULL)",
                    (int(member_id), opened_at),
                )
                session_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateOpenSessionError(
                    "Member already has an open session",
                    member_id=int(member_id),
                ) from e
            raise
        return AttendanceSession(session_id=session_id, member_id=int(member_id), check_in=opened_at)

    def close_session(self, *, session_id: int, member_id: int, closed_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE checkins
                SET check_out=%s
                WHERE checkin_id=%s AND member_id=%s AND check_out IS NULL
                """,
                (closed_at, int(session_id), int(member_id)),
            )
            return cur.rowcount > 0

    def list_for_member(self, member_id: int, limit: int) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT checkin_id, member_id, check_in, check_out
                FROM checkins
                WHERE member_id=%s
                ORDER BY check_in DESC
                LIMIT %s
                """,
                (int(member_id), int(limit)),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def list_for_gym(self, gym_id: int, *, since: Optional[datetime] = None) -> Sequence[AttendanceSession]:
        clauses = ["m.gym_id=%s"]
        params: list[object] = [int(gym_id)]
        if since is not None:
            clauses.append("c.check_in >= %s")
            params.append(since)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT c.checkin_id, c.member_id, c.check_in, c.check_out
                FROM checkins c
                JOIN members m ON m.member_id = c.member_id
                WHERE {where}
                ORDER BY c.check_in DESC
                """,
                tuple(params),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def list_open_for_gym(self, gym_id: int) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT c.checkin_id, c.member_id, c.check_in, c.check_out
                FROM checkins c
                JOIN members m ON m.member_id = c.member_id
                WHERE m.gym_id=%s AND c.check_out IS NULL
                ORDER BY c.member_id ASC, c.check_in DESC
                """,
                (int(gym_id),),
            )
            return [_to_session(r) for r in fetchall(cur)]
