from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

import requests

from ..core.constants import DEFAULT_STORAGE_TIMEOUT
from ..core.exceptions import BlobUploadError
from .blob_store import BlobStore

logger = logging.getLogger(__name__)


class HttpBlobStore(BlobStore):
    """Client for a Supabase-Storage-compatible object API.

    Objects are written with ``POST {base}/storage/v1/object/{bucket}/{path}``
    and served from ``{base}/storage/v1/object/public/{bucket}/{path}``.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = DEFAULT_STORAGE_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = float(timeout)
        self._session = session or requests.Session()

    def _object_path(self, bucket: str, path: str) -> str:
        return f"{quote(bucket, safe='')}/{quote(path.lstrip('/'))}"

    def upload(self, bucket: str, path: str, data: bytes, *, content_type: str, upsert: bool = True) -> None:
        url = f"{self._base_url}/storage/v1/object/{self._object_path(bucket, path)}"
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "apikey": self._api_key,
            "Content-Type": content_type or "application/octet-stream",
            "x-upsert": "true" if upsert else "false",
        }
        try:
            r = self._session.post(url, data=data, headers=headers, timeout=self._timeout)
        except requests.exceptions.RequestException as e:
            raise BlobUploadError(f"Upload to {bucket}/{path} failed: {e}") from e

        if not r.ok:
            raise BlobUploadError(_error_message(r))
        logger.debug("Uploaded %s/%s (%d bytes)", bucket, path, len(data))

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self._base_url}/storage/v1/object/public/{self._object_path(bucket, path)}"


def _error_message(r: requests.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "error", "msg"):
            if body.get(key):
                return str(body[key])
    return f"HTTP {r.status_code}"
