from __future__ import annotations

from dataclasses import dataclass, field
from types import ModuleType
from typing import Any

from .constants import (
    DEFAULT_PHOTO_BUCKET,
    DEFAULT_PORT,
    DEFAULT_QR_BUCKET,
    DEFAULT_STORAGE_TIMEOUT,
)
from .exceptions import ConfigurationError

_REQUIRED_DB_KEYS = ("host", "user", "database")


@dataclass(frozen=True)
class AppSettings:
    """Configuration read once at startup and passed explicitly to the workflows."""

    db_config: dict = field(hash=False)
    storage_url: str
    storage_key: str
    frontend_url: str
    admin_pin: str
    port: int = DEFAULT_PORT
    photo_bucket: str = DEFAULT_PHOTO_BUCKET
    qr_bucket: str = DEFAULT_QR_BUCKET
    storage_timeout: float = DEFAULT_STORAGE_TIMEOUT
    cors_origins: str = "*"
    auto_init_db: bool = False
    log_level: str = "INFO"
    debug: bool = False

    def __repr__(self) -> str:
        # Keep secrets out of logs.
        return (
            f"AppSettings(db={self.db_config.get('user')}@{self.db_config.get('host')}:"
            f"{self.db_config.get('port', 3306)}/{self.db_config.get('database')}, "
            f"storage_url={self.storage_url!r}, frontend_url={self.frontend_url!r}, port={self.port})"
        )


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def load_settings(settings: ModuleType | Any) -> AppSettings:
    """Build AppSettings from a settings module (see the ``config`` package).

    Raises ConfigurationError naming every missing required value.
    """

    missing: list[str] = []

    db_config = dict(getattr(settings, "DB_CONFIG", None) or {})
    for key in _REQUIRED_DB_KEYS:
        if _blank(db_config.get(key)):
            missing.append(f"DB_{'NAME' if key == 'database' else key.upper()}")

    required = {}
    for name in ("STORAGE_URL", "STORAGE_KEY", "FRONTEND_URL", "ADMIN_PIN"):
        value = getattr(settings, name, None)
        if _blank(value):
            missing.append(name)
        else:
            required[name] = str(value).strip()

    if missing:
        raise ConfigurationError(missing)

    return AppSettings(
        db_config=db_config,
        storage_url=required["STORAGE_URL"].rstrip("/"),
        storage_key=required["STORAGE_KEY"],
        frontend_url=required["FRONTEND_URL"].rstrip("/"),
        admin_pin=required["ADMIN_PIN"],
        port=int(getattr(settings, "PORT", DEFAULT_PORT) or DEFAULT_PORT),
        photo_bucket=str(getattr(settings, "PHOTO_BUCKET", DEFAULT_PHOTO_BUCKET) or DEFAULT_PHOTO_BUCKET),
        qr_bucket=str(getattr(settings, "QR_BUCKET", DEFAULT_QR_BUCKET) or DEFAULT_QR_BUCKET),
        storage_timeout=float(getattr(settings, "STORAGE_TIMEOUT", DEFAULT_STORAGE_TIMEOUT) or DEFAULT_STORAGE_TIMEOUT),
        cors_origins=str(getattr(settings, "CORS_ORIGINS", "*") or "*"),
        auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
        log_level=str(getattr(settings, "LOG_LEVEL", "INFO") or "INFO").upper(),
        debug=bool(getattr(settings, "DEBUG", False)),
    )
