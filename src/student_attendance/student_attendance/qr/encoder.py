"""QR image helpers: encode a scan target to PNG, decode uploaded images."""
from __future__ import annotations

import io

import qrcode
from PIL import Image


def encode_png(text: str, *, box_size: int = 10, border: int = 4) -> bytes:
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=box_size,
        border=border,
    )
    qr.add_data(text)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def decode_image(data: bytes) -> list[str]:
    """Return the text payloads of every QR symbol found in ``data``."""

    # Imported lazily: pyzbar needs the zbar shared library at import time.
    from pyzbar.pyzbar import decode as pyzbar_decode

    img = Image.open(io.BytesIO(data)).convert("RGB")
    return [d.data.decode("utf-8") for d in pyzbar_decode(img)]
