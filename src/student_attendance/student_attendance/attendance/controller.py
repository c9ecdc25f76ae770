from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify, render_template, request

from ..common.datetime_utils import now_local
from ..core.constants import ALREADY_TAKEN_MESSAGE, DEFAULT_HISTORY_LIMIT, SCANNER_LECTURER, UNKNOWN
from ..core.exceptions import AuthorizationError, NotFoundError, UpstreamError, ValidationError
from ..container import Container
from ..qr.encoder import decode_image
from ..qr.scan_target import parse_scan_target
from .model import AttendanceRecord
from .service import MarkResult

logger = logging.getLogger(__name__)


def attendance_json(record: AttendanceRecord) -> dict:
    return {
        "id": record.id,
        "student_id": record.student_id,
        "lecturer": record.lecturer,
        "course": record.course,
        "attendance_date": record.attendance_date.isoformat(),
        "created_at": record.created_at.isoformat() if record.created_at else None,
    }


def _error(message: str, status: int):
    return jsonify({"ok": False, "error": message}), status


def register(app: Flask, container: Container) -> None:
    def _mark_json(*, student_id: Optional[str], admin_pin: Optional[str], lecturer: Optional[str], course: Optional[str]):
        try:
            result: MarkResult = container.attendance_service.mark(
                student_id=student_id,
                admin_pin=admin_pin,
                lecturer=lecturer,
                course=course,
            )
        except ValidationError as e:
            return _error(str(e), 400)
        except AuthorizationError as e:
            return _error(str(e), 403)
        except NotFoundError as e:
            return _error(str(e), 404)
        except UpstreamError as e:
            logger.error("Recording attendance failed: %s", e)
            return _error(str(e), 500)
        except Exception as e:
            logger.exception("Attendance error")
            return _error(str(e) or "Server error", 500)

        if result.already_recorded:
            return jsonify({"ok": False, "error": ALREADY_TAKEN_MESSAGE}), 200
        return jsonify({"ok": True, "attendance": attendance_json(result.record)})

    @app.route("/api/attendance", methods=["POST"], endpoint="api_mark_attendance")
    def mark_attendance():
        """Used by the in-app scanner and the frontend."""
        data = request.get_json(silent=True)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            return _error("Invalid JSON body", 400)
        return _mark_json(
            student_id=data.get("student_id"),
            admin_pin=data.get("admin_pin"),
            lecturer=data.get("lecturer"),
            course=data.get("course"),
        )

    @app.route("/api/attendance/scan", methods=["POST"], endpoint="api_scan_attendance")
    def scan_attendance():
        """Accept an uploaded photo of a student's QR code and record attendance."""
        file = request.files.get("image")
        if not file:
            return _error("Missing image", 400)

        try:
            payloads = decode_image(file.read())
        except Exception:
            logger.warning("Uploaded image could not be read as a QR code", exc_info=True)
            return _error("Could not read QR code from image", 400)

        student_id = next((sid for sid in map(parse_scan_target, payloads) if sid), None)
        if not student_id:
            return _error("No student QR code found in image", 400)

        return _mark_json(
            student_id=student_id,
            admin_pin=request.form.get("admin_pin"),
            lecturer=request.form.get("lecturer"),
            course=request.form.get("course"),
        )

    @app.route("/api/attendance/mark", methods=["GET"], endpoint="api_mark_attendance_page")
    def mark_attendance_page():
        """Convenience for external scanners that can only open a URL.

        Example: /api/attendance/mark?student_id=...&pin=1234
        Without a valid PIN a small form is returned that resubmits here.
        """
        student_id = (request.args.get("student_id") or "").strip()
        pin = request.args.get("pin")

        if not student_id:
            return render_template("attendance/message.html", title="Missing student_id in query"), 400

        if not container.attendance_service.check_pin(pin):
            return render_template("attendance/confirm.html", student_id=student_id, invalid_pin=bool(pin))

        try:
            result = container.attendance_service.mark(
                student_id=student_id,
                admin_pin=pin,
                lecturer=SCANNER_LECTURER,
                course=UNKNOWN,
            )
        except NotFoundError as e:
            return render_template("attendance/message.html", title=str(e), student_id=student_id), 404
        except Exception:
            logger.exception("Scanner attendance failed for student %s", student_id)
            return render_template("attendance/message.html", title="Failed to record attendance"), 500

        if result.already_recorded:
            return render_template("attendance/message.html", title=ALREADY_TAKEN_MESSAGE, student_id=student_id)

        return render_template(
            "attendance/message.html",
            title="Attendance recorded",
            student_id=student_id,
            recorded_at=now_local().strftime("%Y-%m-%d %H:%M:%S"),
        )

    @app.route("/api/student/<student_id>/attendance", methods=["GET"], endpoint="api_student_attendance")
    def student_attendance(student_id: str):
        try:
            limit = int(request.args.get("limit", DEFAULT_HISTORY_LIMIT))
        except ValueError:
            return _error("Invalid limit", 400)

        try:
            records = container.attendance_service.history(student_id, limit=max(1, limit))
        except NotFoundError as e:
            return _error(str(e), 404)
        except UpstreamError as e:
            logger.error("Fetching attendance for %s failed: %s", student_id, e)
            return _error(str(e), 500)
        return jsonify({"ok": True, "attendance": [attendance_json(r) for r in records]})
