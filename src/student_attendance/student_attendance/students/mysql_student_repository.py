from __future__ import annotations

import uuid
from typing import Any, Dict, Optional, Sequence

from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository

_COLUMNS = "id, name, username, email, matric_number, photo_url, qr_code_url, created_at"


def _to_student(r: Dict[str, Any]) -> Student:
    return Student(
        id=str(r["id"]),
        name=r["name"],
        username=r["username"],
        email=r["email"],
        matric_number=r["matric_number"],
        photo_url=r.get("photo_url"),
        qr_code_url=r.get("qr_code_url"),
        created_at=r.get("created_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, name: str, username: str, email: str, matric_number: str) -> Student:
        student_id = str(uuid.uuid4())
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(id, name, username, email, matric_number)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (student_id, name, username, email, matric_number),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE id=%s", (student_id,))
            return _to_student(fetchone(cur))

    def get_by_id(self, student_id: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE id=%s", (student_id,))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY created_at DESC")
            return [_to_student(r) for r in fetchall(cur)]

    def update_urls(self, *, student_id: str, photo_url: Optional[str], qr_code_url: Optional[str]) -> Student:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE students SET photo_url=%s, qr_code_url=%s WHERE id=%s",
                (photo_url, qr_code_url, student_id),
            )
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE id=%s", (student_id,))
            r = fetchone(cur)
            if not r:
                raise NotFoundError("Student not found")
            return _to_student(r)
