"""
Pytest configuration and fixtures for content entry service tests.
Provides AWS mocking, DynamoDB, S3 and SQS fixtures with proper cleanup.
"""

import os
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

# Configure the environment before any handler module (and its Tracer) is imported.
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["AWS_SECURITY_TOKEN"] = "testing"
os.environ["AWS_SESSION_TOKEN"] = "testing"
os.environ["AWS_REGION"] = "us-east-1"
os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
os.environ.pop("AWS_ENDPOINT_URL", None)
os.environ.setdefault("CONTENT_ENTRY_TABLE_NAME", "content-entries-test")
os.environ.setdefault("CONTENT_S3_BUCKET_NAME", "content-entries-test")
os.environ.setdefault("CONTENT_SOURCE_ROOT", tempfile.gettempdir())
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "content-entry-service")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "ContentEntryServiceTests")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")

import boto3  # noqa: E402
import pytest  # noqa: E402
from moto import mock_aws  # noqa: E402


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def dynamodb_table(dynamodb_resource, monkeypatch):
    """
    Create the content entry table with its display-name index.

    moto discards the table when the mock context exits.
    """
    table_name = os.environ["CONTENT_ENTRY_TABLE_NAME"]
    monkeypatch.delenv("CONTENT_STAGED_VISIBILITY", raising=False)

    table = dynamodb_resource.create_table(
        TableName=table_name,
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": "entry_id", "KeyType": "HASH"}],
        AttributeDefinitions=[
            {"AttributeName": "entry_id", "AttributeType": "S"},
            {"AttributeName": "display_name", "AttributeType": "S"},
        ],
        GlobalSecondaryIndexes=[
            {
                "IndexName": "display-name-index",
                "KeySchema": [{"AttributeName": "display_name", "KeyType": "HASH"}],
                "Projection": {"ProjectionType": "ALL"},
            },
        ],
    )
    table.wait_until_exists()

    return table


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """Create the entry bucket and return its name."""
    bucket_name = os.environ["CONTENT_S3_BUCKET_NAME"]
    s3_client.create_bucket(Bucket=bucket_name)
    return bucket_name


@pytest.fixture
def s3_get_object(s3_client, s3_bucket) -> Callable[[str], bytes]:
    """
    Helper to read an object from the entry bucket.

    Usage:
        content = s3_get_object("Pictures/ObscuraSim/ent_1.jpg")
    """

    def _get(key: str) -> bytes:
        response: dict[str, Any] = s3_client.get_object(Bucket=s3_bucket, Key=key)
        data: bytes = response["Body"].read()
        return data

    return _get


@pytest.fixture
def s3_object_keys(s3_client, s3_bucket) -> Callable[[], list[str]]:
    """Helper listing every key in the entry bucket."""

    def _keys() -> list[str]:
        response = s3_client.list_objects_v2(Bucket=s3_bucket)
        return [obj["Key"] for obj in response.get("Contents", [])]

    return _keys


@pytest.fixture(scope="function")
def sqs_client(aws_mock):
    return boto3.client("sqs", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def share_queue_url(sqs_client, monkeypatch) -> str:
    """Create the share queue and expose it through SHARE_QUEUE_URL."""
    queue_url: str = sqs_client.create_queue(QueueName="share-requests-test")["QueueUrl"]
    monkeypatch.setenv("SHARE_QUEUE_URL", queue_url)
    return queue_url


@pytest.fixture
def receive_share_messages(sqs_client, share_queue_url) -> Callable[[], list[dict[str, Any]]]:
    """Helper draining the share queue."""

    def _receive() -> list[dict[str, Any]]:
        response = sqs_client.receive_message(
            QueueUrl=share_queue_url,
            MaxNumberOfMessages=10,
            MessageAttributeNames=["All"],
        )
        messages: list[dict[str, Any]] = response.get("Messages", [])
        return messages

    return _receive


@pytest.fixture
def content_repository(dynamodb_table, s3_bucket):
    """Content repository with staged visibility, backed by moto."""
    from core.infrastructure.aws.dynamodb_content_repository import DynamoDBContentRepository

    return DynamoDBContentRepository()


@pytest.fixture
def entries_named(dynamodb_table) -> Callable[[str], list[dict[str, Any]]]:
    """
    Helper returning every stored row with a display name, pending or not.

    Usage:
        rows = entries_named("photo1")
    """

    def _rows(display_name: str) -> list[dict[str, Any]]:
        response = dynamodb_table.scan()
        return [item for item in response.get("Items", []) if item.get("display_name") == display_name]

    return _rows


@pytest.fixture
def sample_jpeg_binary() -> bytes:
    """Sample binary JPEG data (minimal valid JPEG)."""
    return (
        b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
        b"\xff\xdb\x00C\x00\x08\x06\x06\x07\x06\x05\x08\x07\x07\x07\t\t\x08\n\x0c"
        b"\x14\r\x0c\x0b\x0b\x0c\x19\x12\x13\x0f\x14\x1d\x1a\x1f\x1e\x1d\x1a\x1c"
        b"\x1c $.' \",#\x1c\x1c(7),01444\x1f'9=82<.342\xff\xc0\x00\x0b\x08"
        b"\x00\x01\x00\x01\x01\x01\x11\x00\xff\xc4\x00\x14\x00\x01\x00\x00\x00"
        b"\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\t\xff\xc4\x00\x14\x10"
        b"\x01\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00"
        b"\xff\xda\x00\x08\x01\x01\x00\x00?\x00\x7f\x00\xff\xd9"
    )


@pytest.fixture
def source_image(tmp_path: Path, sample_jpeg_binary: bytes) -> str:
    """Path of a fully written local JPEG file."""
    path = tmp_path / "img.jpg"
    path.write_bytes(sample_jpeg_binary)
    return str(path)
