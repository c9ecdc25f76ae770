from __future__ import annotations

import io

import pytest

from src.student_attendance.student_attendance.core.exceptions import UpstreamError


def _register(client, **overrides):
    data = {"name": "Amy Lin", "username": "amyl", "email": "a@x.edu", "matric_number": "M123"}
    data.update(overrides)
    return client.post("/api/student", data=data, content_type="multipart/form-data")


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.get_json() == {"ok": True}


def test_register_student_returns_record_with_urls(client):
    r = _register(client)
    body = r.get_json()

    assert r.status_code == 200
    assert body["ok"] is True
    student = body["student"]
    assert student["id"]
    assert student["name"] == "Amy Lin"
    assert student["matric_number"] == "M123"
    assert student["photo_url"] is None
    assert student["qr_code_url"].endswith(f"qr_{student['id']}.png")
    assert student["scan_url"] == f"http://frontend.test/scan?id={student['id']}"
    assert "warnings" not in body


def test_register_with_photo(client, blob_store):
    r = _register(client, photo=(io.BytesIO(b"fake-jpeg"), "me.jpg", "image/jpeg"))
    student = r.get_json()["student"]

    assert student["photo_url"].endswith(f"photo_{student['id']}.png")
    assert blob_store.objects[("student-photos", f"photo_{student['id']}.png")] == (b"fake-jpeg", "image/jpeg")


def test_register_photo_failure_reports_warning(client, blob_store):
    blob_store.failing_buckets.add("student-photos")

    r = _register(client, photo=(io.BytesIO(b"fake-jpeg"), "me.jpg", "image/jpeg"))
    body = r.get_json()

    assert r.status_code == 200
    assert body["student"]["photo_url"] is None
    assert body["warnings"] == ["photo_upload_failed"]


def test_register_missing_field_is_400(client, students_repo):
    r = _register(client, email="")
    assert r.status_code == 400
    assert r.get_json() == {"ok": False, "error": "Missing required fields"}
    assert students_repo.by_id == {}


def test_register_qr_upload_failure_is_500(client, blob_store):
    blob_store.failing_buckets.add("qr-codes")
    r = _register(client)
    assert r.status_code == 500
    assert r.get_json() == {"ok": False, "error": "Failed to upload QR code"}


def test_get_and_list_students(client):
    sid = _register(client).get_json()["student"]["id"]

    r = client.get(f"/api/student/{sid}")
    assert r.status_code == 200
    assert r.get_json()["student"]["id"] == sid

    r = client.get("/api/student")
    assert [s["id"] for s in r.get_json()["students"]] == [sid]


def test_get_unknown_student_is_404(client):
    r = client.get("/api/student/nope")
    assert r.status_code == 404
    assert r.get_json() == {"ok": False, "error": "Student not found"}


def test_attendance_flow(client, admin_pin):
    sid = _register(client).get_json()["student"]["id"]
    payload = {"student_id": sid, "lecturer": "Dr. Okoro", "course": "CS101", "admin_pin": admin_pin}

    r = client.post("/api/attendance", json=payload)
    body = r.get_json()
    assert r.status_code == 200
    assert body["ok"] is True
    assert body["attendance"]["student_id"] == sid
    assert body["attendance"]["lecturer"] == "Dr. Okoro"
    assert body["attendance"]["course"] == "CS101"

    r = client.post("/api/attendance", json=payload)
    assert r.status_code == 200
    assert r.get_json() == {"ok": False, "error": "Attendance already taken today"}

    r = client.get(f"/api/student/{sid}/attendance")
    assert len(r.get_json()["attendance"]) == 1


def test_attendance_errors(client, admin_pin, attendance_repo):
    sid = _register(client).get_json()["student"]["id"]

    assert client.post("/api/attendance", json={"admin_pin": admin_pin}).status_code == 400
    assert client.post("/api/attendance", json={}).status_code == 400

    r = client.post("/api/attendance", json={"student_id": sid, "admin_pin": "wrong"})
    assert r.status_code == 403
    assert r.get_json()["ok"] is False
    assert attendance_repo.records == {}

    r = client.post("/api/attendance", json={"student_id": "nobody", "admin_pin": admin_pin})
    assert r.status_code == 404


def test_scanner_page_without_pin_renders_escaped_form(client, attendance_repo):
    r = client.get("/api/attendance/mark", query_string={"student_id": '"><script>alert(1)</script>'})
    html = r.get_data(as_text=True)

    assert r.status_code == 200
    assert "<form" in html
    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html
    assert "Invalid PIN" not in html
    assert attendance_repo.records == {}


def test_scanner_page_wrong_pin_shows_form_again(client):
    r = client.get("/api/attendance/mark", query_string={"student_id": "abc", "pin": "nope"})
    html = r.get_data(as_text=True)
    assert r.status_code == 200
    assert "Invalid PIN" in html
    assert 'name="pin"' in html


def test_scanner_page_records_attendance(client, admin_pin, attendance_repo):
    sid = _register(client).get_json()["student"]["id"]

    r = client.get("/api/attendance/mark", query_string={"student_id": sid, "pin": admin_pin})
    assert r.status_code == 200
    assert "Attendance recorded" in r.get_data(as_text=True)
    (record,) = attendance_repo.records.values()
    assert record.lecturer == "external-scanner"
    assert record.course == "Unknown"

    r = client.get("/api/attendance/mark", query_string={"student_id": sid, "pin": admin_pin})
    assert r.status_code == 200
    assert "Attendance already taken today" in r.get_data(as_text=True)


def test_scanner_page_missing_student_id(client):
    r = client.get("/api/attendance/mark")
    assert r.status_code == 400
    assert "Missing student_id" in r.get_data(as_text=True)


def test_scan_endpoint_rejects_missing_image(client, admin_pin):
    r = client.post("/api/attendance/scan", data={"admin_pin": admin_pin}, content_type="multipart/form-data")
    assert r.status_code == 400


def test_scan_endpoint_decodes_uploaded_qr(client, admin_pin, blob_store, attendance_repo):
    pytest.importorskip("pyzbar.pyzbar", exc_type=ImportError)
    sid = _register(client).get_json()["student"]["id"]
    qr_png, _ = blob_store.objects[("qr-codes", f"qr_{sid}.png")]

    r = client.post(
        "/api/attendance/scan",
        data={"image": (io.BytesIO(qr_png), "qr.png", "image/png"), "admin_pin": admin_pin, "course": "CS101"},
        content_type="multipart/form-data",
    )

    assert r.status_code == 200
    assert r.get_json()["attendance"]["student_id"] == sid
    (record,) = attendance_repo.records.values()
    assert record.course == "CS101"


@pytest.mark.parametrize("body", [[1], "x", 5])
def test_attendance_rejects_non_object_json(client, body):
    r = client.post("/api/attendance", json=body)

    assert r.status_code == 400
    assert r.get_json() == {"ok": False, "error": "Invalid JSON body"}


def test_numeric_pin_does_not_match_string_pin(client, attendance_repo):
    sid = _register(client).get_json()["student"]["id"]

    r = client.post("/api/attendance", json={"student_id": sid, "admin_pin": 4321})

    assert r.status_code == 403
    assert attendance_repo.records == {}


def test_register_store_failure_passes_message_through(client, students_repo):
    students_repo.fail_with = UpstreamError("boom")

    r = _register(client)

    assert r.status_code == 500
    assert r.get_json() == {"ok": False, "error": "boom"}


def test_attendance_store_failure_passes_message_through(client, admin_pin, attendance_repo):
    sid = _register(client).get_json()["student"]["id"]
    attendance_repo.fail_with = UpstreamError("boom")

    r = client.post("/api/attendance", json={"student_id": sid, "admin_pin": admin_pin})

    assert r.status_code == 500
    assert r.get_json() == {"ok": False, "error": "boom"}


def test_scanner_page_store_failure_renders_error(client, admin_pin, attendance_repo):
    sid = _register(client).get_json()["student"]["id"]
    attendance_repo.fail_with = UpstreamError("boom")

    r = client.get("/api/attendance/mark", query_string={"student_id": sid, "pin": admin_pin})

    assert r.status_code == 500
    assert "Failed to record attendance" in r.get_data(as_text=True)
