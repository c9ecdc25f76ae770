from __future__ import annotations

from typing import Protocol


class BlobStore(Protocol):
    """Named binary objects per bucket, each retrievable by a public URL."""

    def upload(self, bucket: str, path: str, data: bytes, *, content_type: str, upsert: bool = True) -> None:
        raise NotImplementedError

    def public_url(self, bucket: str, path: str) -> str:
        raise NotImplementedError
