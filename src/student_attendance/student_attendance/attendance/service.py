from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import local_day
from ..common.validators import or_default, require_non_empty
from ..core.constants import DEFAULT_HISTORY_LIMIT, UNKNOWN
from ..core.exceptions import AuthorizationError, DuplicateAttendanceError, NotFoundError
from ..students.repository import StudentRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkResult:
    """``created`` is False when the student was already recorded today.

    That is a business outcome, not an error.
    """

    record: Optional[AttendanceRecord]
    created: bool

    @property
    def already_recorded(self) -> bool:
        return not self.created


class AttendanceService:
    """Use case: record attendance, at most once per (student, course, lecturer, day)."""

    def __init__(self, attendance: AttendanceRepository, students: StudentRepository, *, admin_pin: str):
        self._attendance = attendance
        self._students = students
        self._admin_pin = admin_pin

    def check_pin(self, pin: Optional[str]) -> bool:
        if not isinstance(pin, str) or not pin or not self._admin_pin:
            return False
        return hmac.compare_digest(pin.encode("utf-8"), self._admin_pin.encode("utf-8"))

    def mark(
        self,
        *,
        student_id: Optional[str],
        admin_pin: Optional[str],
        lecturer: Optional[str] = None,
        course: Optional[str] = None,
        now: datetime | None = None,
    ) -> MarkResult:
        student_id = require_non_empty(student_id, "student_id")
        if not self.check_pin(admin_pin):
            raise AuthorizationError("Forbidden: invalid admin pin")

        lecturer = or_default(lecturer, UNKNOWN)
        course = or_default(course, UNKNOWN)
        today = local_day(now)

        existing = self._attendance.find_for_day(student_id=student_id, course=course, lecturer=lecturer, day=today)
        if existing:
            return MarkResult(record=existing, created=False)

        try:
            record = self._attendance.create(student_id=student_id, course=course, lecturer=lecturer, day=today)
        except DuplicateAttendanceError:
            # Lost the race against a concurrent request; the unique key decided.
            logger.info("Concurrent duplicate attendance for student %s on %s", student_id, today)
            return MarkResult(record=None, created=False)

        logger.info("Attendance recorded: student=%s course=%s lecturer=%s", student_id, course, lecturer)
        return MarkResult(record=record, created=True)

    def history(self, student_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        if not self._students.get_by_id(student_id):
            raise NotFoundError("Student not found")
        return self._attendance.get_recent_for_student(student_id, limit)
