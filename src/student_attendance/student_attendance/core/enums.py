from __future__ import annotations

from enum import Enum


class PhotoUploadStatus(str, Enum):
    """Outcome of the optional photo upload during registration."""

    UPLOADED = "uploaded"
    SKIPPED = "skipped"
    FAILED = "failed"
