from __future__ import annotations

import json
from typing import Optional
from urllib.parse import parse_qs, quote, urlparse


def build_scan_url(frontend_url: str, student_id: str) -> str:
    """Deep link opened by a generic scanner, e.g. ``https://app/scan?id=<id>``."""
    return f"{frontend_url.rstrip('/')}/scan?id={quote(str(student_id), safe='')}"


def parse_scan_target(text: str) -> Optional[str]:
    """Extract the student id from either payload format.

    Accepts the deep link (``...?id=<id>``) and the JSON form (``{"id": <id>}``).
    """

    text = (text or "").strip()
    if not text:
        return None

    if text.startswith("{"):
        try:
            payload = json.loads(text)
        except ValueError:
            return None
        value = payload.get("id") if isinstance(payload, dict) else None
        return str(value) if value not in (None, "") else None

    values = parse_qs(urlparse(text).query).get("id")
    if values and values[0].strip():
        return values[0].strip()
    return None
