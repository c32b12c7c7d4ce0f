"""QR image renderer for encoded invoice payloads."""
from __future__ import annotations

import io
import logging
from pathlib import Path

import qrcode
from PIL import Image

from .config import settings

logger = logging.getLogger("zatcaqr.renderer")

ERROR_CORRECTION_LEVELS = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}


def generate_qr_image(data: str, *, error_correction: str | None = None, size: int | None = None) -> Image.Image:
    """Generate a square black-on-white QR image of ``size`` pixels.

    The image is enlarged when ``size`` is smaller than the symbol plus its
    quiet zone, so every module keeps at least one pixel.
    """

    level = (error_correction or settings.render.error_correction).upper()
    if level not in ERROR_CORRECTION_LEVELS:
        raise ValueError(f"unknown error-correction level: {level!r}")
    size = size or settings.render.size

    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECTION_LEVELS[level],
        box_size=1,
        border=settings.render.border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white").get_image().convert("L")
    # never draw a module narrower than one pixel
    min_size = img.size[0]
    if size < min_size:
        logger.warning("qr image enlarged to fit the symbol", extra={"requested_size": size, "size": min_size})
        size = min_size
    logger.debug("qr symbol built", extra={"version": qr.version, "level": level, "size": size})
    return img.resize((size, size), Image.NEAREST)


def qr_image_to_png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def write_qr_png(payload: str, path: str | Path, *, error_correction: str | None = None, size: int | None = None) -> Path:
    """Render ``payload`` and write it to ``path`` as PNG."""

    target = Path(path)
    image = generate_qr_image(payload, error_correction=error_correction, size=size)
    target.write_bytes(qr_image_to_png_bytes(image))
    logger.info("qr image written", extra={"path": str(target)})
    return target
