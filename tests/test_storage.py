"""Tests for the S3 storage glue.

No network access: uploads go to a fake client that records the
``put_object`` call, and session tests only build a boto3 client.
"""

import base64

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from logobanner import storage
from logobanner.config import BASE_BUCKET_URL, DEFAULT_BUCKET_NAME, Settings, get_settings
from logobanner.errors import ConfigurationError, MetadataFormatError, StorageUnavailableError


class FakeS3Client:
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def put_object(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return {"ETag": '"abc"'}


@pytest.fixture
def aws_env(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_REGION", "eu-west-1")


def test_build_public_url_is_plain_concatenation():
    assert storage.build_public_url("https://b.example/", "a b.png") == "https://b.example/a b.png"


def test_image_url_uses_default_bucket():
    assert storage.image_url("x.png") == BASE_BUCKET_URL + "x.png"
    assert BASE_BUCKET_URL == "https://images-robinbrick.s3.eu-west-1.amazonaws.com/"


def test_start_session_without_credentials():
    with pytest.raises(ConfigurationError) as excinfo:
        storage.start_session()
    assert excinfo.value.missing == ["AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "AWS_REGION"]
    assert "AWS_REGION" in str(excinfo.value)


def test_start_session_reports_only_missing(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_REGION", "eu-west-1")
    with pytest.raises(ConfigurationError) as excinfo:
        storage.start_session()
    assert excinfo.value.missing == ["AWS_SECRET_ACCESS_KEY"]


def test_start_session_reads_dotenv(isolated_env):
    (isolated_env / ".env").write_text(
        "AWS_ACCESS_KEY_ID=fromfile\nAWS_SECRET_ACCESS_KEY=fromfile\nAWS_REGION=eu-west-1\nUNRELATED=1\n"
    )
    client = storage.start_session()
    assert client.meta.region_name == "eu-west-1"


def test_start_session_builds_s3_client(aws_env):
    client = storage.start_session()
    assert client.meta.service_model.service_name == "s3"
    assert client.meta.region_name == "eu-west-1"


def test_upload_with_generated_name():
    raw = b"\x89PNG fake"
    payload = "data:image/png;base64," + base64.b64encode(raw).decode()
    client = FakeS3Client()
    url = storage.upload_image_in_base64(client, payload, name_generator=lambda: 99)
    assert url == BASE_BUCKET_URL + "99.png"
    assert client.calls == [
        {
            "Bucket": DEFAULT_BUCKET_NAME,
            "Key": "99.png",
            "Body": raw,
            "ContentType": "image/png",
            "GrantRead": storage.PUBLIC_READ_GRANT,
        }
    ]


def test_upload_with_explicit_name_and_settings():
    settings = Settings(bucket_name="other", bucket_base_url="https://cdn.example/")
    client = FakeS3Client()
    url = storage.upload_image_in_base64(
        client, "data:image/jpeg;base64,AAAA", file_name="testimage.jpg", settings=settings
    )
    assert url == "https://cdn.example/testimage.jpg"
    assert client.calls[0]["Bucket"] == "other"
    assert client.calls[0]["Key"] == "testimage.jpg"


def test_upload_bucket_settings_from_env(monkeypatch):
    monkeypatch.setenv("BUCKET_NAME", "env-bucket")
    monkeypatch.setenv("BUCKET_BASE_URL", "https://env.example/")
    client = FakeS3Client()
    url = storage.upload_image_in_base64(client, "data:image/png;base64,AAAA", file_name="k.png")
    assert url == "https://env.example/k.png"
    assert client.calls[0]["Bucket"] == "env-bucket"
    assert get_settings().bucket_name == "env-bucket"


@pytest.mark.parametrize(
    "error",
    [
        ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject"),
        EndpointConnectionError(endpoint_url="https://s3.example"),
    ],
)
def test_upload_failure_is_storage_unavailable(error):
    client = FakeS3Client(error=error)
    with pytest.raises(StorageUnavailableError) as excinfo:
        storage.upload_image_in_base64(client, "data:image/png;base64,AAAA", file_name="k.png")
    assert excinfo.value.__cause__ is error


def test_upload_rejects_malformed_payload_before_calling_s3():
    client = FakeS3Client()
    with pytest.raises(MetadataFormatError):
        storage.upload_image_in_base64(client, "AAAA")
    assert client.calls == []
