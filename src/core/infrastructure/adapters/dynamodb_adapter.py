"""Thin DynamoDB adapter wrapping boto3 table operations."""

import os
from typing import Any, Protocol, cast

import boto3

from core.utils.constants import (
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_CONTENT_ENTRY_TABLE_NAME,
)


class DynamoDBTable(Protocol):
    """Minimal DynamoDB Table protocol."""

    def put_item(self, *, Item: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def get_item(self, *, Key: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def update_item(self, *, Key: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def delete_item(self, *, Key: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def query(self, **kwargs: Any) -> dict[str, Any]: ...


class DynamoDBAdapterProtocol(Protocol):
    """Repository-facing DynamoDB adapter protocol."""

    def put_item(
        self,
        *,
        item: dict[str, Any],
        condition_expression: str | None = None,
    ) -> dict[str, Any]: ...

    def get_item(self, *, key: dict[str, Any], consistent_read: bool = False) -> dict[str, Any]: ...

    def update_item(
        self,
        *,
        key: dict[str, Any],
        update_expression: str,
        expression_values: dict[str, Any],
        condition_expression: str | None = None,
    ) -> dict[str, Any]: ...

    def delete_item(
        self,
        *,
        key: dict[str, Any],
        return_values: str | None = None,
    ) -> dict[str, Any]: ...

    def query(self, **kwargs: Any) -> dict[str, Any]: ...


class DynamoDBAdapter:
    """Low-level DynamoDB operations (mechanical, no error handling).

    This adapter:
    - Wraps the boto3 DynamoDB resource for the content entry table
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self) -> None:
        """Initialize DynamoDB table from environment."""
        table_name = os.getenv(ENV_CONTENT_ENTRY_TABLE_NAME)
        if not table_name:
            raise RuntimeError(
                f"{ENV_CONTENT_ENTRY_TABLE_NAME} environment variable is not set"
            )

        dynamodb = boto3.resource(
            "dynamodb",
            endpoint_url=os.getenv(ENV_AWS_ENDPOINT_URL),
            region_name=os.getenv(ENV_AWS_REGION),
        )

        self.table: DynamoDBTable = cast(
            DynamoDBTable,
            dynamodb.Table(table_name),
        )

    def put_item(
        self,
        *,
        item: dict[str, Any],
        condition_expression: str | None = None,
    ) -> dict[str, Any]:
        """Insert item into DynamoDB.

        Raises boto3 exceptions - caught by domain implementation.
        """
        kwargs: dict[str, Any] = {"Item": item}

        if condition_expression:
            kwargs["ConditionExpression"] = condition_expression

        return self.table.put_item(**kwargs)

    def get_item(self, *, key: dict[str, Any], consistent_read: bool = False) -> dict[str, Any]:
        """Retrieve item by key."""
        return self.table.get_item(Key=key, ConsistentRead=consistent_read)

    def update_item(
        self,
        *,
        key: dict[str, Any],
        update_expression: str,
        expression_values: dict[str, Any],
        condition_expression: str | None = None,
    ) -> dict[str, Any]:
        """Update attributes of an existing item.

        Raises boto3 exceptions - caught by domain implementation.
        """
        kwargs: dict[str, Any] = {
            "Key": key,
            "UpdateExpression": update_expression,
            "ExpressionAttributeValues": expression_values,
        }

        if condition_expression:
            kwargs["ConditionExpression"] = condition_expression

        return self.table.update_item(**kwargs)

    def delete_item(
        self,
        *,
        key: dict[str, Any],
        return_values: str | None = None,
    ) -> dict[str, Any]:
        """Delete item by key, optionally returning the removed attributes."""
        kwargs: dict[str, Any] = {"Key": key}

        if return_values:
            kwargs["ReturnValues"] = return_values

        return self.table.delete_item(**kwargs)

    def query(self, **kwargs: Any) -> dict[str, Any]:
        """Execute DynamoDB query."""
        return self.table.query(**kwargs)
