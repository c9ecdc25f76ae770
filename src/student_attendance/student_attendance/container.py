from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.settings import AppSettings
from .database.connection import DatabaseConnection
from .storage.blob_store import BlobStore
from .storage.http_blob_store import HttpBlobStore
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import RegistrationService


@dataclass(frozen=True)
class Container:
    settings: AppSettings

    students_repo: StudentRepository
    attendance_repo: AttendanceRepository
    blob_store: BlobStore

    registration_service: RegistrationService
    attendance_service: AttendanceService


def build_services(
    settings: AppSettings,
    *,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    blob_store: BlobStore,
) -> Container:
    registration_service = RegistrationService(
        students_repo,
        blob_store,
        frontend_url=settings.frontend_url,
        photo_bucket=settings.photo_bucket,
        qr_bucket=settings.qr_bucket,
    )
    attendance_service = AttendanceService(attendance_repo, students_repo, admin_pin=settings.admin_pin)

    return Container(
        settings=settings,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        blob_store=blob_store,
        registration_service=registration_service,
        attendance_service=attendance_service,
    )


def build_container(settings: AppSettings) -> Container:
    conn = DatabaseConnection.from_dict(settings.db_config)
    return build_services(
        settings,
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        blob_store=HttpBlobStore(settings.storage_url, settings.storage_key, timeout=settings.storage_timeout),
    )
