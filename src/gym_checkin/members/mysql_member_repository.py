from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Member
from .repository import MemberRepository


def _to_member(row: Dict[str, Any]) -> Member:
    return Member(
        member_id=int(row["member_id"]),
        gym_id=int(row["gym_id"]),
        name=row["name"],
        user_id=row.get("user_id"),
        email=row.get("email"),
        phone=row.get("phone"),
    )


class MySQLMemberRepository(MemberRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, member_id: int) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT member_id, gym_id, user_id, name, email, phone FROM members WHERE member_id=%s",
                (int(member_id),),
            )
            row = fetchone(cur)
            return _to_member(row) if row else None

    def get_by_user_id(self, user_id: int) -> Optional[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT member_id, gym_id, user_id, name, email, phone FROM members WHERE user_id=%s",
                (int(user_id),),
            )
            row = fetchone(cur)
            return _to_member(row) if row else None

    def list_for_gym(self, gym_id: int) -> Sequence[Member]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT member_id, gym_id, user_id, name, email, phone
                FROM members
                WHERE gym_id=%s
                ORDER BY name ASC
                """,
                (int(gym_id),),
            )
            return [_to_member(r) for r in fetchall(cur)]
