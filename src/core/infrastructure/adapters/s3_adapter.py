"""Thin adapter for interacting with Amazon S3."""

from collections.abc import Mapping
import os
from typing import IO, Any, Protocol

import boto3

from core.utils.constants import (
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_CONTENT_S3_BUCKET_NAME,
)


class _Boto3S3Client(Protocol):
    """Internal typing for boto3 S3 client (AWS-facing only)."""

    def upload_fileobj(
        self,
        Fileobj: IO[bytes],
        Bucket: str,
        Key: str,
        ExtraArgs: Mapping[str, Any] | None = None,
    ) -> None: ...

    def delete_object(
        self,
        *,
        Bucket: str,
        Key: str,
    ) -> Any: ...


class S3AdapterProtocol(Protocol):
    """Minimal S3 adapter protocol (repository-facing)."""

    def upload_fileobj(
        self,
        *,
        key: str,
        fileobj: IO[bytes],
        content_type: str,
        metadata: dict[str, str],
    ) -> None: ...

    def delete_object(self, *, key: str) -> None: ...


class S3Adapter:
    """Low-level S3 operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 S3 client
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self) -> None:
        """Create S3 client from environment configuration."""
        bucket_name = os.getenv(ENV_CONTENT_S3_BUCKET_NAME)
        if not bucket_name:
            raise RuntimeError(f"{ENV_CONTENT_S3_BUCKET_NAME} environment variable is not set")

        self._bucket = bucket_name
        self._client: _Boto3S3Client = boto3.client(
            "s3",
            endpoint_url=os.getenv(ENV_AWS_ENDPOINT_URL),
            region_name=os.getenv(ENV_AWS_REGION),
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def upload_fileobj(
        self,
        *,
        key: str,
        fileobj: IO[bytes],
        content_type: str,
        metadata: dict[str, str],
    ) -> None:
        """Stream a readable file object into S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.upload_fileobj(
            fileobj,
            self._bucket,
            key,
            ExtraArgs={"ContentType": content_type, "Metadata": metadata},
        )

    def delete_object(self, *, key: str) -> None:
        """Delete object from S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.delete_object(
            Bucket=self._bucket,
            Key=key,
        )
