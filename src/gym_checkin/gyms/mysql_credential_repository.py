from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import FacilityCredential
from .repository import CredentialRepository


class MySQLCredentialRepository(CredentialRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_current(self, gym_id: int) -> Optional[FacilityCredential]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT gym_id, qr_value, created_at
                FROM universal_qr
                WHERE gym_id=%s
                ORDER BY created_at DESC
                LIMIT 1
                """,
                (int(gym_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return FacilityCredential(gym_id=int(r["gym_id"]), qr_value=r["qr_value"], created_at=r["created_at"])

    def replace(self, *, gym_id: int, qr_value: str, created_at: datetime) -> FacilityCredential:
        # delete and insert commit together
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM universal_qr WHERE gym_id=%s", (int(gym_id),))
            cur.execute(
                "INSERT INTO universal_qr(gym_id, qr_value, created_at) VALUES(%s,%s,%s)",
                (int(gym_id), qr_value, created_at),
            )
        return FacilityCredential(gym_id=int(gym_id), qr_value=qr_value, created_at=created_at)
