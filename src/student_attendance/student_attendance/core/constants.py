"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

DEFAULT_PORT = 5000
DEFAULT_PHOTO_BUCKET = "student-photos"
DEFAULT_QR_BUCKET = "qr-codes"
DEFAULT_STORAGE_TIMEOUT = 10.0
DEFAULT_HISTORY_LIMIT = 30

UNKNOWN = "Unknown"
SCANNER_LECTURER = "external-scanner"

PHOTO_PATH_TEMPLATE = "photo_{student_id}.png"
QR_PATH_TEMPLATE = "qr_{student_id}.png"

ALREADY_TAKEN_MESSAGE = "Attendance already taken today"
PHOTO_UPLOAD_FAILED_WARNING = "photo_upload_failed"
