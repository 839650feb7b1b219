"""Bitmap helpers built on Pillow.

Bytes come in as any format Pillow can identify from content and are
normalised to RGBA; banners always go out as JPEG. Everything happens in
memory through ``io.BytesIO``.
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Optional, Tuple

from PIL import Image  # type: ignore[import]

from .config import get_settings
from .errors import ImageDecodeError, ImageEncodeError

logger = logging.getLogger(__name__)


def decode_bitmap(data: bytes) -> Image.Image:
    """Open raw image bytes with Pillow and convert to RGBA.

    Only the first frame of animated formats is used.

    Raises:
        ImageDecodeError: If Pillow cannot identify or read the data.
    """
    try:
        img = Image.open(BytesIO(data))
        img.load()
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageDecodeError(f"Could not decode image: {exc}") from exc
    logger.debug("Decoded %s image %dx%d (%s)", img.format, img.width, img.height, img.mode)
    if img.mode != "RGBA":
        img = img.convert("RGBA")
    return img


def encode_bitmap(bitmap: Image.Image, quality: Optional[int] = None) -> bytes:
    """Serialise a bitmap as JPEG bytes, dropping any alpha channel.

    Args:
        bitmap: Image to encode.
        quality: JPEG quality. Defaults to the ``JPEG_QUALITY``
            setting, read at call time.

    Raises:
        ImageEncodeError: If the image has a zero dimension or Pillow fails
            to write it.
    """
    if bitmap.width == 0 or bitmap.height == 0:
        raise ImageEncodeError(f"Cannot encode a {bitmap.width}x{bitmap.height} image.")
    if quality is None:
        quality = get_settings().jpeg_quality
    img = bitmap if bitmap.mode == "RGB" else bitmap.convert("RGB")
    buffer = BytesIO()
    try:
        img.save(buffer, format="JPEG", quality=quality)
    except (OSError, ValueError) as exc:
        raise ImageEncodeError(f"Could not encode image as JPEG: {exc}") from exc
    return buffer.getvalue()


def fit_within(width: int, height: int, max_width: int, max_height: int) -> Tuple[int, int]:
    """Return the size of a ``width`` x ``height`` image scaled down into a box.

    Aspect ratio is preserved, images already inside the box keep their
    size, and neither side drops below one pixel.
    """
    if width <= max_width and height <= max_height:
        return width, height
    ratio = min(max_width / width, max_height / height)
    new_width = max(1, min(max_width, round(width * ratio)))
    new_height = max(1, min(max_height, round(height * ratio)))
    return new_width, new_height


def resize(
    bitmap: Image.Image,
    max_width: int,
    max_height: int,
    resample: int = Image.NEAREST,
) -> Image.Image:
    """Scale a bitmap down so it fits within ``max_width`` x ``max_height``.

    Uses nearest-neighbour sampling unless another filter is given.

    Returns:
        A new image. The input is never modified.
    """
    size = fit_within(bitmap.width, bitmap.height, max_width, max_height)
    if size == bitmap.size:
        return bitmap.copy()
    logger.debug("Resizing %dx%d to %dx%d", bitmap.width, bitmap.height, *size)
    return bitmap.resize(size, resample=resample)
