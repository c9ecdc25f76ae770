from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..common.validators import require_fields
from ..core.constants import PHOTO_PATH_TEMPLATE, QR_PATH_TEMPLATE
from ..core.enums import PhotoUploadStatus
from ..core.exceptions import BlobUploadError, NotFoundError, QrUploadFailed
from ..qr.encoder import encode_png
from ..qr.scan_target import build_scan_url
from ..storage.blob_store import BlobStore
from .model import PhotoUpload, Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "username", "email", "matric_number")


@dataclass(frozen=True)
class RegistrationResult:
    student: Student
    scan_url: str
    photo_status: PhotoUploadStatus


class RegistrationService:
    """Use case: register a student, store their photo and QR code.

    Photo upload failure is a warning (``PhotoUploadStatus.FAILED``);
    QR upload failure aborts the request with ``QrUploadFailed``.
    """

    def __init__(
        self,
        students: StudentRepository,
        blobs: BlobStore,
        *,
        frontend_url: str,
        photo_bucket: str,
        qr_bucket: str,
        qr_encoder: Callable[[str], bytes] = encode_png,
    ):
        self._students = students
        self._blobs = blobs
        self._frontend_url = frontend_url
        self._photo_bucket = photo_bucket
        self._qr_bucket = qr_bucket
        self._encode = qr_encoder

    def register(
        self,
        *,
        name: Optional[str],
        username: Optional[str],
        email: Optional[str],
        matric_number: Optional[str],
        photo: Optional[PhotoUpload] = None,
    ) -> RegistrationResult:
        fields = require_fields(
            {"name": name, "username": username, "email": email, "matric_number": matric_number},
            REQUIRED_FIELDS,
        )

        student = self._students.create(**fields)
        logger.info("Registered student %s", student.id)

        photo_url, photo_status = self._upload_photo(student.id, photo)

        scan_url = build_scan_url(self._frontend_url, student.id)
        qr_path = QR_PATH_TEMPLATE.format(student_id=student.id)
        try:
            self._blobs.upload(self._qr_bucket, qr_path, self._encode(scan_url), content_type="image/png", upsert=True)
        except BlobUploadError as e:
            logger.error("QR upload failed for student %s: %s", student.id, e)
            raise QrUploadFailed("Failed to upload QR code") from e
        qr_code_url = self._blobs.public_url(self._qr_bucket, qr_path)

        student = self._students.update_urls(student_id=student.id, photo_url=photo_url, qr_code_url=qr_code_url)
        return RegistrationResult(student=student, scan_url=scan_url, photo_status=photo_status)

    def _upload_photo(self, student_id: str, photo: Optional[PhotoUpload]) -> tuple[Optional[str], PhotoUploadStatus]:
        if photo is None or not photo.data:
            return None, PhotoUploadStatus.SKIPPED

        path = PHOTO_PATH_TEMPLATE.format(student_id=student_id)
        try:
            self._blobs.upload(self._photo_bucket, path, photo.data, content_type=photo.content_type, upsert=True)
        except BlobUploadError as e:
            logger.warning("Photo upload failed for student %s: %s", student_id, e)
            return None, PhotoUploadStatus.FAILED
        return self._blobs.public_url(self._photo_bucket, path), PhotoUploadStatus.UPLOADED

    def get_student(self, student_id: str) -> Student:
        student = self._students.get_by_id(student_id) if student_id else None
        if not student:
            raise NotFoundError("Student not found")
        return student

    def list_students(self) -> Sequence[Student]:
        return self._students.list_all()
