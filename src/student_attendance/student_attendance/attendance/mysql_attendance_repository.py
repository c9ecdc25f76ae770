from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = "id, student_id, lecturer, course, attendance_date, created_at"


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(r["id"]),
        student_id=str(r["student_id"]),
        lecturer=r["lecturer"],
        course=r["course"],
        attendance_date=r["attendance_date"],
        created_at=r.get("created_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_for_day(self, *, student_id: str, course: str, lecturer: str, day: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE student_id=%s AND course=%s AND lecturer=%s AND attendance_date=%s
                LIMIT 1
                """,
                (student_id, course, lecturer, day),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create(self, *, student_id: str, course: str, lecturer: str, day: date) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(student_id, lecturer, course, attendance_date)
                VALUES(%s,%s,%s,%s)
                """,
                (student_id, lecturer, course, day),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM attendance WHERE id=%s", (cur.lastrowid,))
            return _to_record(fetchone(cur))

    def get_recent_for_student(self, student_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance
                WHERE student_id=%s
                ORDER BY created_at DESC, id DESC
                LIMIT %s
                """,
                (student_id, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]
