from __future__ import annotations

from datetime import date, datetime


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def local_day(now: datetime | None = None) -> date:
    """Calendar day in the server's local timezone."""
    return (now or now_local()).date()
