"""Logo banner package.

This package turns an uploaded logo (a base64 data URI) into a fixed-size
1400x400 JPEG banner on a solid background colour, and provides the thin
S3 glue used to publish the results. See individual modules for details.
"""

from .compositor import change_background, composite
from .errors import (
    ColorParseError,
    ConfigurationError,
    ImageDecodeError,
    ImageEncodeError,
    LogoBannerError,
    MetadataFormatError,
    StorageUnavailableError,
)

__all__ = [
    "change_background",
    "composite",
    "ColorParseError",
    "ConfigurationError",
    "ImageDecodeError",
    "ImageEncodeError",
    "LogoBannerError",
    "MetadataFormatError",
    "StorageUnavailableError",
]
