from __future__ import annotations

import io

import pytest

pytest.importorskip("pyzbar.pyzbar", reason="zbar shared library not available", exc_type=ImportError)

from PIL import Image

from event_checkin.checkin.capture import ImageFileCaptureSource, decode_qr_image
from event_checkin.checkin.payload import encode_payload
from event_checkin.core.exceptions import CaptureError
from event_checkin.passes.qr import make_pass_png


def test_member_pass_decodes_back_to_payload():
    png = make_pass_png("M-0003", 2)

    assert decode_qr_image(io.BytesIO(png)) == encode_payload("M-0003", 2)


def test_blank_image_has_no_code():
    assert decode_qr_image(Image.new("RGB", (64, 64), "white")) is None


def test_unreadable_image_raises_capture_error():
    with pytest.raises(CaptureError):
        decode_qr_image(io.BytesIO(b"not an image"))


def test_image_file_source_reads_each_file_once(tmp_path):
    path = tmp_path / "frame.png"
    path.write_bytes(make_pass_png("M-0001", 1))
    source = ImageFileCaptureSource([path])

    assert source.read() == encode_payload("M-0001", 1)
    assert source.read() is None
