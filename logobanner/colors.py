"""Colour specification parsing.

Accepts hex notation (``#rgb``, ``#rgba``, ``#rrggbb``, ``#rrggbbaa``), CSS
colour names and the functional ``rgb()``, ``rgba()``, ``hsl()`` and
``hsv()`` forms. Alpha is accepted but ignored: the banner background is
always opaque.
"""

from __future__ import annotations

from PIL import ImageColor  # type: ignore[import]

from .errors import ColorParseError
from .models import Color


def parse(spec: str) -> Color:
    """Parse a colour specification into an opaque ``Color``.

    Raises:
        ColorParseError: If ``spec`` matches none of the accepted forms.
    """
    if not isinstance(spec, str) or not spec.strip():
        raise ColorParseError(f"Unrecognised colour: {spec!r}")
    try:
        rgb = ImageColor.getrgb(spec.strip())
    except ValueError as exc:
        raise ColorParseError(f"Unrecognised colour: {spec!r}") from exc
    if any(channel > 255 for channel in rgb[:3]):
        raise ColorParseError(f"Colour channel out of range: {spec!r}")
    return Color(r=rgb[0], g=rgb[1], b=rgb[2])
