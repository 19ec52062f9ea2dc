"""
PATH: products/services/uploads.py

UPLOAD VALIDATION + STORAGE

- Images (catalog):   <= 5 MB, jpeg/png/webp/gif
- Audio (messages):   <= 10 MB, any audio/* MIME, mp3/wav/webm/ogg/m4a
- 3D models (scents): <= 20 MB, glb/gltf

Stored names: "{unix_ms}-{uuid8}-{sanitized_base[:50]}{ext}".
"""

from __future__ import annotations

import logging
import os
import re
import time
import uuid

from public.services.blob import put_blob

logger = logging.getLogger(__name__)

MB = 1024 * 1024

MAX_IMAGE_SIZE = 5 * MB
MAX_AUDIO_SIZE = 10 * MB
MAX_MODEL_SIZE = 20 * MB

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")
ALLOWED_IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp", ".gif")
ALLOWED_AUDIO_EXTENSIONS = (".mp3", ".wav", ".webm", ".ogg", ".m4a")
ALLOWED_MODEL_EXTENSIONS = (".glb", ".gltf")

IMAGE_PREFIX = "products"
AUDIO_PREFIX = "uploads/audio"
MODEL_PREFIX = "models3d"

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9\-_]")


class UploadValidationError(ValueError):
    pass


def file_extension(filename: str) -> str:
    return os.path.splitext(filename or "")[1].lower()


def secure_filename(original_name: str) -> str:
    base, ext = os.path.splitext(original_name or "")
    safe_base = _UNSAFE_CHARS.sub("_", base)[:50]
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{safe_base}{ext.lower()}"


def _check_size(upload, max_size: int) -> None:
    if upload.size > max_size:
        raise UploadValidationError(
            f"File is too large. Maximum size: {round(max_size / MB)}MB"
        )


def _check_extension(upload, allowed: tuple) -> None:
    if file_extension(upload.name) not in allowed:
        raise UploadValidationError(
            f"File extension not allowed. Accepted extensions: {', '.join(allowed)}"
        )


# ---------------- VALIDATION ----------------
def validate_image(upload) -> None:
    _check_size(upload, MAX_IMAGE_SIZE)
    if (upload.content_type or "") not in ALLOWED_IMAGE_TYPES:
        raise UploadValidationError(
            f"File type not allowed. Accepted types: {', '.join(ALLOWED_IMAGE_TYPES)}"
        )
    _check_extension(upload, ALLOWED_IMAGE_EXTENSIONS)


def validate_audio(upload) -> None:
    _check_size(upload, MAX_AUDIO_SIZE)
    # any audio/* subtype
    if not (upload.content_type or "").startswith("audio/"):
        raise UploadValidationError("File must be an audio file")
    _check_extension(upload, ALLOWED_AUDIO_EXTENSIONS)


def validate_model(upload) -> None:
    _check_size(upload, MAX_MODEL_SIZE)
    _check_extension(upload, ALLOWED_MODEL_EXTENSIONS)


# ---------------- STORAGE ----------------
def _store(upload, prefix: str) -> str:
    pathname = f"{prefix}/{secure_filename(upload.name)}"
    blob = put_blob(
        pathname,
        upload.read(),
        content_type=upload.content_type or "application/octet-stream",
    )
    logger.info("File uploaded", extra={"pathname": pathname, "size": upload.size})
    return blob["url"]


def upload_image(upload) -> str:
    validate_image(upload)
    return _store(upload, IMAGE_PREFIX)


def upload_audio(upload) -> str:
    validate_audio(upload)
    return _store(upload, AUDIO_PREFIX)


def upload_model(upload) -> str:
    validate_model(upload)
    return _store(upload, MODEL_PREFIX)
