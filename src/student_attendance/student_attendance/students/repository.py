from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def create(self, *, name: str, username: str, email: str, matric_number: str) -> Student:
        raise NotImplementedError

    def get_by_id(self, student_id: str) -> Optional[Student]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def update_urls(self, *, student_id: str, photo_url: Optional[str], qr_code_url: Optional[str]) -> Student:
        raise NotImplementedError
