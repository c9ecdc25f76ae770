from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a registered student.

    Pure data object; persistence lives in the repository.
    """

    id: str
    name: str
    username: str
    email: str
    matric_number: str
    photo_url: Optional[str] = None
    qr_code_url: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class PhotoUpload:
    data: bytes
    content_type: str
