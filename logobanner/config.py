"""Runtime settings.

Values come from environment variables or a ``.env`` file in the working
directory (names are case-insensitive, so ``AWS_REGION`` fills
``aws_region``).

Environment variables:
    AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY, AWS_REGION: credentials for
        the S3 session. All three are required by ``storage.start_session``.
    BUCKET_NAME: Bucket that receives uploads (default 'images-robinbrick').
    BUCKET_BASE_URL: Public URL prefix for uploaded keys.
    JPEG_QUALITY: Quality used when encoding banners (default 85).
    LOG_LEVEL: Logging level for the API process (default 'INFO').
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BUCKET_NAME = "images-robinbrick"
BASE_BUCKET_URL = "https://images-robinbrick.s3.eu-west-1.amazonaws.com/"

# Settings that must be present before an S3 session is opened
REQUIRED_AWS_VARS = ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "AWS_REGION")


class Settings(BaseSettings):

    aws_access_key_id: Optional[str] = Field(default=None, description="AWS access key")
    aws_secret_access_key: Optional[str] = Field(default=None, description="AWS secret key")
    aws_region: Optional[str] = Field(default=None, description="AWS region of the bucket")
    bucket_name: str = Field(
        default=DEFAULT_BUCKET_NAME,
        description="Bucket that receives uploaded images"
    )
    bucket_base_url: str = Field(
        default=BASE_BUCKET_URL,
        description="Public URL prefix joined with the object key"
    )
    jpeg_quality: int = Field(
        default=85,
        ge=1,
        le=95,
        description="JPEG quality for composited banners"
    )
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    def missing_aws_vars(self) -> list[str]:
        """Return the names of required AWS settings that are unset or empty."""
        return [name for name in REQUIRED_AWS_VARS if not getattr(self, name.lower())]


def get_settings() -> Settings:
    """Build a fresh ``Settings`` from the current environment."""
    return Settings()


settings = get_settings()
