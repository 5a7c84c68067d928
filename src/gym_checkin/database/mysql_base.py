from __future__ import annotations

import logging
from contextlib import contextmanager, suppress
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import StoreUnavailableError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# Errors that mean "the store is not reachable right now" rather than "the query is wrong".
_TRANSIENT_ERRORS = (mysql.connector.InterfaceError, mysql.connector.OperationalError)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        logger.warning("database connect failed: %s", e)
        raise StoreUnavailableError("Data store is unavailable, please retry") from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except _TRANSIENT_ERRORS as e:
        with suppress(mysql.connector.Error):
            conn.rollback()
        logger.warning("database operation failed: %s", e)
        raise StoreUnavailableError("Data store is unavailable, please retry") from e
    except Exception:
        with suppress(mysql.connector.Error):
            conn.rollback()
        raise
    finally:
        with suppress(mysql.connector.Error):
            conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def is_duplicate_key(error: Exception) -> bool:
    return isinstance(error, mysql.connector.IntegrityError) and getattr(error, "errno", None) == errorcode.ER_DUP_ENTRY
