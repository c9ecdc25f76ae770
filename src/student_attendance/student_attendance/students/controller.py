from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.constants import PHOTO_UPLOAD_FAILED_WARNING
from ..core.enums import PhotoUploadStatus
from ..core.exceptions import NotFoundError, UpstreamError, ValidationError
from ..container import Container
from .model import PhotoUpload, Student

logger = logging.getLogger(__name__)


def student_json(student: Student) -> dict:
    return {
        "id": student.id,
        "name": student.name,
        "username": student.username,
        "email": student.email,
        "matric_number": student.matric_number,
        "photo_url": student.photo_url,
        "qr_code_url": student.qr_code_url,
        "created_at": student.created_at.isoformat() if student.created_at else None,
    }


def _error(message: str, status: int):
    return jsonify({"ok": False, "error": message}), status


def register(app: Flask, container: Container) -> None:
    @app.route("/api/student", methods=["POST"], endpoint="api_register_student")
    def register_student():
        photo = None
        file = request.files.get("photo")
        if file and file.filename:
            data = file.read()
            if data:
                photo = PhotoUpload(data=data, content_type=file.mimetype or "application/octet-stream")

        try:
            result = container.registration_service.register(
                name=request.form.get("name"),
                username=request.form.get("username"),
                email=request.form.get("email"),
                matric_number=request.form.get("matric_number"),
                photo=photo,
            )
        except ValidationError as e:
            return _error(str(e), 400)
        except UpstreamError as e:
            logger.error("Registration failed: %s", e)
            return _error(str(e), 500)
        except Exception as e:
            logger.exception("Registration error")
            return _error(str(e) or "Server error", 500)

        body = {"ok": True, "student": {**student_json(result.student), "scan_url": result.scan_url}}
        if result.photo_status == PhotoUploadStatus.FAILED:
            body["warnings"] = [PHOTO_UPLOAD_FAILED_WARNING]
        return jsonify(body)

    @app.route("/api/student", methods=["GET"], endpoint="api_list_students")
    def list_students():
        try:
            students = container.registration_service.list_students()
        except UpstreamError as e:
            logger.error("Listing students failed: %s", e)
            return _error(str(e), 500)
        return jsonify({"ok": True, "students": [student_json(s) for s in students]})

    @app.route("/api/student/<student_id>", methods=["GET"], endpoint="api_get_student")
    def get_student(student_id: str):
        try:
            student = container.registration_service.get_student(student_id)
        except NotFoundError as e:
            return _error(str(e), 404)
        except UpstreamError as e:
            logger.error("Fetching student %s failed: %s", student_id, e)
            return _error(str(e), 500)
        return jsonify({"ok": True, "student": student_json(student)})
