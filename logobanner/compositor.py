"""Banner compositing.

A logo is scaled down into a 1000x300 box, centred on a 1400x400 canvas of
a solid colour, and merged with a hard alpha cutoff: logo pixels with alpha
of at least 200 are copied, everything else shows the background colour.
There is no blending, so the output never carries semi-transparent fringes.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from PIL import Image  # type: ignore[import]

from . import codec, colors, image_ops
from .codec import NameGenerator, PayloadLike
from .errors import LogoBannerError
from .models import Color, CompositeResult

logger = logging.getLogger(__name__)

BACKGROUND_IMAGE_WIDTH = 1400
BACKGROUND_IMAGE_HEIGHT = 400
MAX_LOGO_WIDTH = 1000
MAX_LOGO_HEIGHT = 300
ALPHA_THRESHOLD = 200


def placement(logo_size: Tuple[int, int]) -> Tuple[int, int]:
    """Return the top-left canvas coordinate of a centred logo.

    Canvas and logo sizes are halved separately with floor division, so a
    999px wide logo starts at x=201.
    """
    width, height = logo_size
    return (
        BACKGROUND_IMAGE_WIDTH // 2 - width // 2,
        BACKGROUND_IMAGE_HEIGHT // 2 - height // 2,
    )


def _opacity_mask(logo: Image.Image) -> Image.Image:
    """Binary 'L' mask: 255 where the logo alpha reaches the threshold."""
    return logo.getchannel("A").point(lambda a: 255 if a >= ALPHA_THRESHOLD else 0)


def composite(logo: Image.Image, fill: Color) -> Image.Image:
    """Place ``logo`` in the middle of a ``fill`` coloured banner.

    Args:
        logo: RGBA bitmap of any size. Larger logos are scaled down to fit
            the logo box; smaller ones keep their size.
        fill: Background colour.

    Returns:
        A new 1400x400 RGBA image whose alpha is 255 everywhere.
    """
    if logo.mode != "RGBA":
        logo = logo.convert("RGBA")
    logo = image_ops.resize(logo, MAX_LOGO_WIDTH, MAX_LOGO_HEIGHT)
    offset = placement(logo.size)

    canvas = Image.new("RGBA", (BACKGROUND_IMAGE_WIDTH, BACKGROUND_IMAGE_HEIGHT), fill.as_rgba())
    mask = _opacity_mask(logo)
    # copied pixels are forced opaque
    logo.putalpha(255)
    canvas.paste(logo, offset, mask)
    logger.debug("Placed %dx%d logo at %s", logo.width, logo.height, offset)
    return canvas


def change_background(
    payload: PayloadLike,
    color_spec: str,
    name_generator: Optional[NameGenerator] = None,
    quality: Optional[int] = None,
) -> CompositeResult:
    """Put a base64 logo on a solid background and return it as JPEG base64.

    Args:
        payload: Logo as a ``data:image/<ext>;base64,`` string.
        color_spec: Background colour, hex or CSS name.
        name_generator: Source of the random number used in the result's
            file name. Defaults to ``codec.random_name``.
        quality: JPEG quality override.

    Returns:
        The banner as a ``data:image/jpeg;base64,`` string and a
        ``<random>.jpeg`` file name.

    Raises:
        ColorParseError, MetadataFormatError, ImageDecodeError,
        ImageEncodeError: From the stage that failed. Nothing partial is
        returned.
    """
    generate = name_generator or codec.random_name
    file_name = f"{generate()}.jpeg"
    try:
        fill = colors.parse(color_spec)
        decoded = codec.decode(payload, file_name=file_name)
        logo = image_ops.decode_bitmap(decoded.data)
        banner = composite(logo, fill)
        jpeg = image_ops.encode_bitmap(banner, quality=quality)
    except LogoBannerError as exc:
        logger.warning("change_background failed: %s: %s", type(exc).__name__, exc)
        raise
    return CompositeResult(image=codec.encode(jpeg, "jpeg"), file_name=file_name)
