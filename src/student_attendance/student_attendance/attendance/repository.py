from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def find_for_day(self, *, student_id: str, course: str, lecturer: str, day: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(self, *, student_id: str, course: str, lecturer: str, day: date) -> AttendanceRecord:
        """Insert one record.

        Raises DuplicateAttendanceError when the (student, course, lecturer, day)
        key already exists and NotFoundError when the student is unknown.
        """

        raise NotImplementedError

    def get_recent_for_student(self, student_id: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
