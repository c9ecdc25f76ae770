from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"Missing {field_name}")
    return str(value).strip()


def require_fields(data: Mapping[str, Any], fields: Sequence[str]) -> dict[str, str]:
    """Return the stripped values of ``fields``; all-or-nothing."""

    missing = [f for f in fields if data.get(f) is None or not str(data.get(f)).strip()]
    if missing:
        raise ValidationError("Missing required fields")
    return {f: str(data[f]).strip() for f in fields}


def or_default(value: Optional[str], default: str) -> str:
    if value is None or not str(value).strip():
        return default
    return str(value).strip()
