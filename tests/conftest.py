"""Shared fixtures for the logo banner tests.

Every test runs from an empty temporary directory with the AWS and bucket
environment variables removed, so a developer's ``.env`` or shell
credentials never leak into the results.
"""

import base64
import io

import pytest
from PIL import Image  # type: ignore

ENV_VARS = (
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "AWS_REGION",
    "BUCKET_NAME",
    "BUCKET_BASE_URL",
    "JPEG_QUALITY",
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def _to_data_uri(img, fmt="PNG"):
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    b64 = base64.b64encode(buf.getvalue()).decode()
    return f"data:image/{fmt.lower()};base64,{b64}"


@pytest.fixture
def make_data_uri():
    """Encode a Pillow image as ``data:image/<fmt>;base64,...``."""
    return _to_data_uri


@pytest.fixture
def open_data_uri():
    """Decode a data URI produced by the service into a Pillow image."""
    return lambda text: Image.open(io.BytesIO(base64.b64decode(text.split(",", 1)[1])))


@pytest.fixture
def red_logo():
    return Image.new("RGBA", (40, 20), (255, 0, 0, 255))


@pytest.fixture
def red_logo_uri(red_logo):
    return _to_data_uri(red_logo)
