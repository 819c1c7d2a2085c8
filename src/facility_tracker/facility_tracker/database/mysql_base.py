from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector

from ..core.exceptions import RemoteError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Yield ``(conn, cursor)``; commit on success, roll back on error.

    Driver errors, and mapping errors raised while reading rows inside the
    block, are re-raised as ``RemoteError``.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise RemoteError(f"Cannot reach database: {e}") from e
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        raise RemoteError(str(e)) from e
    except (KeyError, TypeError, ValueError) as e:
        # Row mapping failed: a missing row or an unexpected column value.
        conn.rollback()
        raise RemoteError(f"Unexpected database row: {e!r}") from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def optional_int(value: Any) -> Optional[int]:
    # Backend stores "no location" as NULL or 0.
    if value is None or value == 0:
        return None
    return int(value)


def optional_str(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)
