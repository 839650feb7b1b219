"""S3 storage for uploaded images.

This module opens a boto3 S3 session from the configured AWS credentials,
uploads base64 images into a publicly readable bucket and builds the public
URL of an uploaded key. Retries and backoff are left to boto3's own client
configuration and to callers.

Environment variables:
    AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY, AWS_REGION: required.
    BUCKET_NAME: Target bucket (default 'images-robinbrick').
    BUCKET_BASE_URL: Public URL prefix of the bucket.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from . import codec
from .codec import NameGenerator, PayloadLike
from .config import Settings, get_settings
from .errors import ConfigurationError, StorageUnavailableError

logger = logging.getLogger(__name__)

# Grants read access to everyone
PUBLIC_READ_GRANT = "uri=http://acs.amazonaws.com/groups/global/AllUsers"


def start_session(settings: Optional[Settings] = None) -> Any:
    """Create an S3 client from the configured credentials.

    Args:
        settings: Settings to use. A fresh ``Settings`` is read from the
            environment (and ``.env``) when omitted.

    Returns:
        A boto3 S3 client.

    Raises:
        ConfigurationError: If any of the AWS credentials is missing.
    """
    settings = settings or get_settings()
    missing = settings.missing_aws_vars()
    if missing:
        raise ConfigurationError(missing)
    logger.info("Opening S3 session in %s", settings.aws_region)
    return boto3.client(
        "s3",
        region_name=settings.aws_region,
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
    )


def build_public_url(bucket_base_url: str, key: str) -> str:
    """Join the bucket base URL and an object key."""
    return f"{bucket_base_url}{key}"


def image_url(key: str, settings: Optional[Settings] = None) -> str:
    """Public URL of ``key`` in the configured bucket."""
    settings = settings or get_settings()
    return build_public_url(settings.bucket_base_url, key)


def upload_image_in_base64(
    client: Any,
    payload: PayloadLike,
    file_name: Optional[str] = None,
    name_generator: Optional[NameGenerator] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Upload a base64 image and return its public URL.

    Args:
        client: S3 client from ``start_session``.
        payload: Image as a ``data:image/<ext>;base64,`` string.
        file_name: Object key. When omitted the key is a random number plus
            the extension from the payload prefix.
        name_generator: Source of random names, see ``codec.decode``.
        settings: Bucket settings. Read from the environment when omitted.

    Returns:
        The URL at which the uploaded object can be fetched.

    Raises:
        MetadataFormatError, ImageDecodeError: If the payload is malformed.
        StorageUnavailableError: If S3 rejects the upload or cannot be
            reached.
    """
    settings = settings or get_settings()
    decoded = codec.decode(payload, file_name=file_name, name_generator=name_generator)
    try:
        client.put_object(
            Bucket=settings.bucket_name,
            Key=decoded.file_name,
            Body=decoded.data,
            ContentType=f"image/{decoded.extension}",
            GrantRead=PUBLIC_READ_GRANT,
        )
    except (BotoCoreError, ClientError) as exc:
        logger.error("S3 upload failed for %s/%s: %s", settings.bucket_name, decoded.file_name, exc)
        raise StorageUnavailableError(f"Upload of {decoded.file_name} failed: {exc}") from exc
    logger.info("Uploaded %d bytes to %s/%s", len(decoded.data), settings.bucket_name, decoded.file_name)
    return build_public_url(settings.bucket_base_url, decoded.file_name)
