"""Thin adapter for publishing messages to Amazon SQS."""

import os
from typing import Any, Protocol

import boto3

from core.utils.constants import (
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_SHARE_QUEUE_URL,
)


class _Boto3SQSClient(Protocol):
    """Internal typing for boto3 SQS client (AWS-facing only)."""

    def send_message(
        self,
        *,
        QueueUrl: str,
        MessageBody: str,
        MessageAttributes: dict[str, Any],
    ) -> dict[str, Any]: ...


class SQSAdapterProtocol(Protocol):
    """Minimal SQS adapter protocol (dispatcher-facing)."""

    def send_message(self, *, body: str, attributes: dict[str, str]) -> str: ...


class SQSAdapter:
    """Low-level SQS operations (mechanical, no error handling)."""

    def __init__(self) -> None:
        """Create SQS client from environment configuration."""
        queue_url = os.getenv(ENV_SHARE_QUEUE_URL)
        if not queue_url:
            raise RuntimeError(f"{ENV_SHARE_QUEUE_URL} environment variable is not set")

        self._queue_url = queue_url
        self._client: _Boto3SQSClient = boto3.client(
            "sqs",
            endpoint_url=os.getenv(ENV_AWS_ENDPOINT_URL),
            region_name=os.getenv(ENV_AWS_REGION),
        )

    def send_message(self, *, body: str, attributes: dict[str, str]) -> str:
        """Publish a message and return its SQS message id.
        Raises boto3 exceptions - caught by domain implementation.
        """
        response = self._client.send_message(
            QueueUrl=self._queue_url,
            MessageBody=body,
            MessageAttributes={
                name: {"DataType": "String", "StringValue": value}
                for name, value in attributes.items()
            },
        )
        return str(response["MessageId"])
