"""
PATH: orders/services/qr.py

QR CODES (AR page links)

- generate_secure_qr_code(): 24 hex chars from uuid4 (unguessable)
- is_valid_qr_code(): 13..24 alphanumerics; 13-char legacy codes stay valid
- qr_target_url(code): {APP_URL}/ar/{code}, https:// added when APP_URL has no scheme
- qr_png_bytes / qr_data_url: rendered with `qrcode` + Pillow (300 px, margin 1, ECC level M)
"""

from __future__ import annotations

import base64
import io
import re
import uuid

import qrcode
from django.conf import settings
from PIL import Image

QR_CODE_PATTERN = re.compile(r"^[a-z0-9]{13,24}$", re.IGNORECASE)

DEFAULT_WIDTH = 300
DEFAULT_MARGIN = 1


def generate_secure_qr_code() -> str:
    return uuid.uuid4().hex[:24]


def is_valid_qr_code(code) -> bool:
    return bool(code) and isinstance(code, str) and bool(QR_CODE_PATTERN.match(code))


def qr_target_url(code: str) -> str:
    base = (settings.APP_URL or "").strip().rstrip("/")
    if not base.startswith(("http://", "https://")):
        base = f"https://{base}"
    return f"{base}/ar/{code}"


def qr_png_bytes(data: str, *, width: int = DEFAULT_WIDTH, margin: int = DEFAULT_MARGIN) -> bytes:
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=margin,
    )
    qr.add_data(data)
    qr.make(fit=True)

    image = qr.make_image(fill_color="black", back_color="white").get_image()
    image = image.convert("RGB").resize((width, width), Image.Resampling.NEAREST)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def qr_data_url(data: str, **kwargs) -> str:
    encoded = base64.b64encode(qr_png_bytes(data, **kwargs)).decode("ascii")
    return f"data:image/png;base64,{encoded}"
