from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import DuplicateAttendanceError, NotFoundError, UpstreamError
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[tuple[Any, Any]]:
    """Open a connection, yield (conn, cursor), commit on success.

    ``mysql.connector`` errors are translated into domain exceptions so callers
    never see driver types.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as e:
        raise UpstreamError(_message(e)) from e

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as e:
        conn.rollback()
        raise translate_error(e) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def translate_error(e: mysql.connector.Error) -> Exception:
    if e.errno == errorcode.ER_DUP_ENTRY:
        return DuplicateAttendanceError(_message(e))
    if e.errno in (errorcode.ER_NO_REFERENCED_ROW, errorcode.ER_NO_REFERENCED_ROW_2):
        return NotFoundError("Student not found")
    return UpstreamError(_message(e))


def _message(e: mysql.connector.Error) -> str:
    return getattr(e, "msg", None) or str(e)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])
