from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Iterable, Optional, Union

from PIL import Image, UnidentifiedImageError
from pyzbar.pyzbar import ZBarSymbol
from pyzbar.pyzbar import decode as pyzbar_decode

from ..core.exceptions import CaptureError

logger = logging.getLogger(__name__)

ImageInput = Union[str, Path, BinaryIO, Image.Image]


def decode_qr_image(image: ImageInput) -> Optional[str]:
    """Return the text of the first QR code found in an image, or None."""

    try:
        img = image if isinstance(image, Image.Image) else Image.open(image)
        img = img.convert("RGB")
    except (OSError, UnidentifiedImageError) as e:
        raise CaptureError(f"Could not read image: {e}") from e

    decoded = pyzbar_decode(img, symbols=[ZBarSymbol.QRCODE])
    if not decoded:
        return None
    return decoded[0].data.decode("utf-8").strip()


class ImageFileCaptureSource:
    """Capture source over a sequence of still images (e.g. frames dumped by a camera)."""

    def __init__(self, paths: Iterable[Union[str, Path]]):
        self._paths = iter(paths)

    def read(self) -> Optional[str]:
        path = next(self._paths, None)
        if path is None:
            return None
        text = decode_qr_image(Path(path))
        if text is None:
            logger.debug("No QR code in %s", path)
        return text
