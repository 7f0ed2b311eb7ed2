"""Convert local image files into the Base64 payload used by printBase64Image."""

from __future__ import annotations

import base64
import io
import logging
from pathlib import Path

from PIL import Image

import config

logger = logging.getLogger(__name__)


def prepare_image(img: Image.Image, width: int | None = None, dithering: bool | None = None) -> Image.Image:
    """Fit an image to the paper width for thermal printing.

    Landscape images are rotated 90° clockwise, then resized to ``width``
    dots preserving aspect ratio. With dithering enabled the result is
    reduced to 1-bit using Floyd-Steinberg.
    """
    if width is None:
        width = config.IMAGE_PRINT_WIDTH
    if dithering is None:
        dithering = config.IMAGE_DITHERING

    img = img.convert("RGB")

    # PIL rotate is CCW, so -90 = CW
    if img.width > img.height:
        img = img.rotate(-90, expand=True)

    if img.width != width:
        ratio = width / img.width
        new_height = max(1, int(img.height * ratio))
        img = img.resize((width, new_height), Image.Resampling.LANCZOS)

    if dithering:
        img = img.convert("L").convert("1", dither=Image.Dither.FLOYDSTEINBERG)

    return img


def image_file_to_base64(path: str | Path, width: int | None = None, dithering: bool | None = None) -> str:
    """Open ``path``, prepare it for the printer and return PNG bytes as Base64 text."""
    with Image.open(path) as src:
        img = prepare_image(src, width=width, dithering=dithering)

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    logger.debug("Image %s prepared: mode=%s, size=%s", path, img.mode, img.size)
    return base64.b64encode(buffer.getvalue()).decode("ascii")
