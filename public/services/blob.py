# public/services/blob.py
from __future__ import annotations

import json
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from django.conf import settings

BLOB_API_BASE = "https://blob.vercel-storage.com"
BLOB_API_VERSION = "7"


class BlobConfigurationError(RuntimeError):
    pass


class BlobUploadError(RuntimeError):
    pass


def _get_token() -> str:
    token = (getattr(settings, "BLOB_READ_WRITE_TOKEN", "") or "").strip()
    if not token:
        raise BlobConfigurationError(
            "BLOB_READ_WRITE_TOKEN is not configured. Expected settings.BLOB_READ_WRITE_TOKEN."
        )
    return token


def _safe_preview(text: str, limit: int = 500) -> str:
    text = (text or "").strip()
    if len(text) <= limit:
        return text
    return text[:limit] + " ...(truncated)"


def put_blob(
    pathname: str,
    content: bytes,
    *,
    content_type: str = "application/octet-stream",
    timeout: int = 30,
) -> dict[str, Any]:
    """
    Store `content` at `pathname` with public access.

    Returns the blob descriptor ({url, pathname, contentType, ...}).
    Raises BlobUploadError on any transport or API failure.
    """
    token = _get_token()
    url = f"{BLOB_API_BASE}/?pathname={quote(pathname, safe='/')}"

    req = Request(
        url,
        data=content,
        headers={
            "Authorization": f"Bearer {token}",
            "x-api-version": BLOB_API_VERSION,
            "x-content-type": content_type,
            "x-vercel-blob-access": "public",
            "Accept": "application/json",
        },
        method="PUT",
    )

    try:
        with urlopen(req, timeout=timeout) as resp:
            raw = resp.read().decode("utf-8", errors="replace")
    except HTTPError as e:
        body = e.read().decode("utf-8", errors="replace") if e.fp else ""
        raise BlobUploadError(f"Blob HTTPError: {e.code} {_safe_preview(body)}") from e
    except URLError as e:
        raise BlobUploadError(f"Blob URLError: {e}") from e

    try:
        parsed = json.loads(raw or "{}")
    except ValueError as e:
        raise BlobUploadError(f"Blob returned non-JSON: {_safe_preview(raw)}") from e

    if not isinstance(parsed, dict) or not parsed.get("url"):
        raise BlobUploadError(f"Blob response missing url: {_safe_preview(raw)}")

    return parsed
