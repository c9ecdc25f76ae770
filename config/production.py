import os

# No defaults for connection details in production: missing values fail startup.
DB_CONFIG = {
    "host": os.getenv("DB_HOST"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME"),
}

STORAGE_URL = os.getenv("STORAGE_URL")
STORAGE_KEY = os.getenv("STORAGE_KEY")
PHOTO_BUCKET = os.getenv("PHOTO_BUCKET", "student-photos")
QR_BUCKET = os.getenv("QR_BUCKET", "qr-codes")
STORAGE_TIMEOUT = float(os.getenv("STORAGE_TIMEOUT", "10"))

FRONTEND_URL = os.getenv("FRONTEND_URL")
ADMIN_PIN = os.getenv("ADMIN_PIN")

PORT = int(os.getenv("PORT", "5000"))
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
