from __future__ import annotations

import io
from typing import Optional

import qrcode

from ..checkin.payload import encode_payload


def make_qr_png(data: str) -> bytes:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=2,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def make_pass_png(member_id: str, event_id: Optional[int] = None) -> bytes:
    """QR image a member shows at the door; it carries the scan payload JSON."""
    return make_qr_png(encode_payload(member_id, event_id))
