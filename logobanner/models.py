"""Pydantic models and data schemas for the logo banner service.

The first group describes values passed between pipeline stages; the
second group is the request/response schemas used by the FastAPI
endpoints in ``main.py``.
"""

from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class EncodedPayload(BaseModel):
    """An image carried as base64 text.

    Attributes:
        encoded: Text shaped as ``data:image/<ext>;base64,<bytes>``.
    """

    model_config = ConfigDict(frozen=True)

    encoded: str


class DecodedPayload(BaseModel):
    """Raw bytes recovered from an ``EncodedPayload``.

    Attributes:
        data: The decoded image bytes.
        extension: Subtype taken from the metadata prefix, e.g. 'png'.
        file_name: Caller supplied name, or ``<random>.<extension>``.
    """

    model_config = ConfigDict(frozen=True)

    data: bytes
    extension: str
    file_name: str


class Color(BaseModel):
    """An opaque RGB colour used to fill the banner background."""

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)

    def as_rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def as_rgba(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, 255)


class CompositeResult(BaseModel):
    """Output of ``change_background``.

    Attributes:
        image: JPEG banner as a ``data:image/jpeg;base64,`` string.
        file_name: Suggested key (``<random>.jpeg``) for uploading the banner.
    """

    model_config = ConfigDict(frozen=True)

    image: str
    file_name: str


class ChangeBackgroundRequest(BaseModel):
    image: str = Field(..., description="Logo as a data:image/<ext>;base64, string")
    color: str = Field(..., description="Background colour, hex or CSS name")


class ChangeBackgroundResponse(BaseModel):
    image: str
    file_name: str


class UploadRequest(BaseModel):
    image: str = Field(..., description="Image as a data:image/<ext>;base64, string")
    file_name: Optional[str] = Field(
        default=None,
        description="Object key; a random name is generated when omitted"
    )


class UploadResponse(BaseModel):
    url: str


class HealthResponse(BaseModel):
    status: str
