from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in of a student for a course on a local day."""

    id: int
    student_id: str
    lecturer: str
    course: str
    attendance_date: date
    created_at: Optional[datetime] = None
