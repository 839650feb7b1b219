"""Exception types raised by the logo banner pipeline.

Every stage of ``change_background`` raises its own error kind so callers
(and the HTTP layer in ``main.py``) can tell bad input apart from storage
or configuration problems.
"""

from __future__ import annotations


class LogoBannerError(Exception):
    """Base class for all errors raised by this package."""


class ColorParseError(LogoBannerError, ValueError):
    """The colour specification is not hex notation or a CSS colour name."""


class MetadataFormatError(LogoBannerError, ValueError):
    """The base64 payload does not start with ``data:image/<ext>;base64,``."""


class ImageDecodeError(LogoBannerError):
    """The payload bytes are not a decodable bitmap."""


class ImageEncodeError(LogoBannerError):
    """A bitmap could not be written as JPEG."""


class ConfigurationError(LogoBannerError):
    """Required settings (AWS credentials) are missing."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(
            f"Missing environment variables: {', '.join(self.missing)}. "
            "Set them in the environment or in a .env file."
        )


class StorageUnavailableError(LogoBannerError):
    """The object store rejected or failed an upload."""
