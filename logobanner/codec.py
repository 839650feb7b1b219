"""Base64 data URI helpers.

Images travel through the API as ``data:image/<ext>;base64,<bytes>``
strings. This module recovers the raw bytes and the extension from such a
string and wraps bytes back into the same shape.
"""

from __future__ import annotations

import base64
import binascii
import logging
import os
import random
from pathlib import Path
from typing import Callable, Optional, Union

from .errors import ImageDecodeError, MetadataFormatError
from .models import DecodedPayload, EncodedPayload

logger = logging.getLogger(__name__)

NameGenerator = Callable[[], int]
PayloadLike = Union[EncodedPayload, str]


def random_name() -> int:
    """Return a random unsigned 64-bit integer for use as a file name."""
    return random.getrandbits(64)


def _text(payload: PayloadLike) -> str:
    return payload.encoded if isinstance(payload, EncodedPayload) else payload


def extract_extension(payload: PayloadLike) -> str:
    """Extract the extension from the metadata prefix of a payload.

    ``"data:image/png;base64,..."`` gives ``"png"``.

    Raises:
        MetadataFormatError: If the prefix has no ``;`` or no ``/``.
    """
    text = _text(payload)
    head, sep, _ = text.partition(";")
    if not sep:
        raise MetadataFormatError("Base64 metadata prefix has no ';' delimiter.")
    parts = head.split("/")
    if len(parts) < 2:
        raise MetadataFormatError("Base64 metadata prefix has no '/' delimiter.")
    return parts[1]


def decode(
    payload: PayloadLike,
    file_name: Optional[str] = None,
    name_generator: Optional[NameGenerator] = None,
) -> DecodedPayload:
    """Convert a base64 data URI into raw bytes and a file name.

    Args:
        payload: The encoded image.
        file_name: Name to use instead of a generated one.
        name_generator: Source of random numeric names. Defaults to
            ``random_name``.

    Returns:
        The decoded bytes, the extension and the file name to store them as.

    Raises:
        MetadataFormatError: If the metadata prefix is malformed.
        ImageDecodeError: If the body is not valid base64.
    """
    text = _text(payload)
    extension = extract_extension(text)
    _, sep, body = text.partition(",")
    if not sep:
        raise MetadataFormatError("Base64 payload has no ',' before the data.")
    try:
        data = base64.b64decode("".join(body.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ImageDecodeError(f"Payload body is not valid base64: {exc}") from exc
    if file_name is None:
        generate = name_generator or random_name
        file_name = f"{generate()}.{extension}"
    logger.debug("Decoded %d bytes of %s as %s", len(data), extension, file_name)
    return DecodedPayload(data=data, extension=extension, file_name=file_name)


def encode(path_or_bytes: Union[bytes, bytearray, str, os.PathLike], extension: Optional[str] = None) -> str:
    """Encode raw bytes (or a file's bytes) as a base64 data URI.

    Args:
        path_or_bytes: The bytes to encode, or a path to read them from.
        extension: Subtype written into the prefix. Defaults to the file
            suffix for paths and 'jpeg' for bytes.

    Returns:
        ``data:image/<extension>;base64,<data>`` with standard padding and
        no line breaks.
    """
    if isinstance(path_or_bytes, (bytes, bytearray)):
        data = bytes(path_or_bytes)
    else:
        path = Path(path_or_bytes)
        data = path.read_bytes()
        if extension is None:
            extension = path.suffix.lstrip(".").lower() or None
    extension = extension or "jpeg"
    return f"data:image/{extension};base64,{base64.b64encode(data).decode('ascii')}"
