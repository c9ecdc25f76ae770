from __future__ import annotations

import itertools
from datetime import date, datetime
from typing import Optional

import pytest

from src.student_attendance.student_attendance.attendance.model import AttendanceRecord
from src.student_attendance.student_attendance.container import build_services
from src.student_attendance.student_attendance.core.exceptions import (
    BlobUploadError,
    DuplicateAttendanceError,
    NotFoundError,
)
from src.student_attendance.student_attendance.core.settings import AppSettings
from src.student_attendance.student_attendance.main import create_app
from src.student_attendance.student_attendance.students.model import Student

ADMIN_PIN = "4321"


class InMemoryStudents:
    def __init__(self):
        self.by_id: dict[str, Student] = {}
        self._ids = itertools.count(1)
        self.update_calls = 0
        # Raised from create() to simulate a store failure.
        self.fail_with: Optional[Exception] = None

    def create(self, *, name, username, email, matric_number) -> Student:
        if self.fail_with:
            raise self.fail_with
        student = Student(
            id=f"00000000-0000-4000-8000-{next(self._ids):012d}",
            name=name,
            username=username,
            email=email,
            matric_number=matric_number,
            created_at=datetime(2026, 3, 2, 9, 0, 0),
        )
        self.by_id[student.id] = student
        return student

    def get_by_id(self, student_id) -> Optional[Student]:
        return self.by_id.get(student_id)

    def list_all(self):
        return list(self.by_id.values())

    def update_urls(self, *, student_id, photo_url, qr_code_url) -> Student:
        self.update_calls += 1
        old = self.by_id[student_id]
        new = Student(
            id=old.id,
            name=old.name,
            username=old.username,
            email=old.email,
            matric_number=old.matric_number,
            photo_url=photo_url,
            qr_code_url=qr_code_url,
            created_at=old.created_at,
        )
        self.by_id[student_id] = new
        return new


class InMemoryAttendance:
    """Mimics the store: unique (student, course, lecturer, day) key and FK to students."""

    def __init__(self, students: InMemoryStudents):
        self._students = students
        self.records: dict[tuple[str, str, str, date], AttendanceRecord] = {}
        self._ids = itertools.count(1)
        # When True, find_for_day never sees existing rows (simulates the check/insert race).
        self.blind_reads = False
        self.fail_with: Optional[Exception] = None

    def find_for_day(self, *, student_id, course, lecturer, day):
        if self.blind_reads:
            return None
        return self.records.get((student_id, course, lecturer, day))

    def create(self, *, student_id, course, lecturer, day) -> AttendanceRecord:
        if self.fail_with:
            raise self.fail_with
        if student_id not in self._students.by_id:
            raise NotFoundError("Student not found")
        key = (student_id, course, lecturer, day)
        if key in self.records:
            raise DuplicateAttendanceError("Duplicate entry")
        rec = AttendanceRecord(
            id=next(self._ids),
            student_id=student_id,
            lecturer=lecturer,
            course=course,
            attendance_date=day,
            created_at=datetime.combine(day, datetime.min.time()),
        )
        self.records[key] = rec
        return rec

    def get_recent_for_student(self, student_id, limit):
        items = [r for r in self.records.values() if r.student_id == student_id]
        items.sort(key=lambda r: r.id, reverse=True)
        return items[:limit]


class FakeBlobStore:
    def __init__(self):
        self.objects: dict[tuple[str, str], tuple[bytes, str]] = {}
        self.failing_buckets: set[str] = set()

    def upload(self, bucket, path, data, *, content_type, upsert=True):
        if bucket in self.failing_buckets:
            raise BlobUploadError(f"bucket {bucket} unavailable")
        self.objects[(bucket, path)] = (data, content_type)

    def public_url(self, bucket, path):
        return f"http://storage.test/storage/v1/object/public/{bucket}/{path}"


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        db_config={"host": "localhost", "user": "root", "database": "attendance_test"},
        storage_url="http://storage.test",
        storage_key="test-key",
        frontend_url="http://frontend.test",
        admin_pin=ADMIN_PIN,
        log_level="WARNING",
    )


@pytest.fixture
def students_repo() -> InMemoryStudents:
    return InMemoryStudents()


@pytest.fixture
def attendance_repo(students_repo) -> InMemoryAttendance:
    return InMemoryAttendance(students_repo)


@pytest.fixture
def blob_store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
def container(settings, students_repo, attendance_repo, blob_store):
    return build_services(
        settings,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        blob_store=blob_store,
    )


@pytest.fixture
def client(container):
    app = create_app(container=container)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def admin_pin() -> str:
    return ADMIN_PIN
