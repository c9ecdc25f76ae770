import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
}

# Object store (Supabase-Storage-compatible) for photos and QR images
STORAGE_URL = os.getenv("STORAGE_URL")
STORAGE_KEY = os.getenv("STORAGE_KEY")
PHOTO_BUCKET = os.getenv("PHOTO_BUCKET", "student-photos")
QR_BUCKET = os.getenv("QR_BUCKET", "qr-codes")
STORAGE_TIMEOUT = float(os.getenv("STORAGE_TIMEOUT", "10"))

# Base URL of the frontend; QR codes deep-link to <FRONTEND_URL>/scan?id=<id>
FRONTEND_URL = os.getenv("FRONTEND_URL")

# Shared PIN required to record attendance
ADMIN_PIN = os.getenv("ADMIN_PIN")

PORT = int(os.getenv("PORT", "5000"))
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
