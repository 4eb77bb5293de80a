import json
from types import SimpleNamespace
from typing import Any

import pytest


@pytest.fixture
def lambda_context():
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )


@pytest.fixture
def save_entry_event(source_image) -> dict[str, Any]:
    return {
        "httpMethod": "POST",
        "path": "/entries",
        "body": json.dumps({"file_path": source_image, "display_name": "photo1.jpg"}),
        "headers": {"Content-Type": "application/json"},
    }


@pytest.fixture
def delete_entry_event() -> dict[str, Any]:
    return {
        "httpMethod": "DELETE",
        "path": "/entries/photo1.jpg",
        "pathParameters": {"display_name": "photo1.jpg"},
    }


def share_event(body: dict[str, Any]) -> dict[str, Any]:
    return {
        "httpMethod": "POST",
        "path": "/entries/share",
        "body": json.dumps(body),
        "headers": {"Content-Type": "application/json"},
    }


@pytest.fixture
def make_share_event():
    return share_event
