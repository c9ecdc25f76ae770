"""Run the attendance backend: ``python app.py`` (settings from APP_ENV / .env)."""

from src.student_attendance.student_attendance.main import run

if __name__ == "__main__":
    run()
