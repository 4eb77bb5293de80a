import json
from http import HTTPStatus
from types import SimpleNamespace
from typing import Any, cast

from core.models.errors import StoreUnavailableError
from core.utils.decorators import api_gateway_handler
from core.utils.response import JsonDict, ResponseBuilder


def parse_body(resp: dict[str, Any]) -> dict[str, Any]:
    """Parse JSON body from API Gateway response."""
    body = resp.get("body")
    if not body:
        return {}
    return cast(dict[str, Any], json.loads(body))


def test_api_handler_success() -> None:
    """Successful handler execution returns response unchanged."""

    @api_gateway_handler
    def handler(event: Any, context: Any) -> JsonDict:
        return ResponseBuilder.ok({"msg": "ok"}, request_id=context.aws_request_id)

    resp = handler({}, SimpleNamespace(aws_request_id="req-ok"))

    parsed = parse_body(resp)
    assert resp["statusCode"] == HTTPStatus.OK
    assert parsed["msg"] == "ok"
    assert parsed["request_id"] == "req-ok"


def test_api_handler_options_preflight() -> None:
    """OPTIONS request returns 204 with CORS headers."""

    @api_gateway_handler
    def handler(event: Any, context: Any) -> JsonDict:  # pragma: no cover
        raise AssertionError("Should not be called")

    resp = handler({"httpMethod": "OPTIONS"}, SimpleNamespace())

    assert resp["statusCode"] == HTTPStatus.NO_CONTENT
    assert resp["body"] == ""
    assert resp["headers"]["Access-Control-Allow-Methods"] == "POST,DELETE,OPTIONS"


def test_options_preflight_with_custom_origin() -> None:
    @api_gateway_handler
    def handler(event: Any, context: Any) -> JsonDict:  # pragma: no cover
        raise AssertionError("Should not be called")

    resp = handler(
        {"httpMethod": "OPTIONS"},
        SimpleNamespace(),
        cors_origin="https://app.example.com",
    )

    assert resp["headers"]["Access-Control-Allow-Origin"] == "https://app.example.com"


def test_escaped_content_store_error_returns_500_with_error_code() -> None:
    @api_gateway_handler
    def handler(event: Any, context: Any) -> JsonDict:
        raise StoreUnavailableError(message="Unable to query content entries")

    resp = handler({}, SimpleNamespace(aws_request_id="req-500"))
    parsed = parse_body(resp)

    assert resp["statusCode"] == HTTPStatus.INTERNAL_SERVER_ERROR
    assert parsed["error"] == "STORE_UNAVAILABLE"
    assert parsed["message"] == "Unable to query content entries"
    assert parsed["request_id"] == "req-500"


def test_value_error_returns_400() -> None:
    """ValueError returns 400 with its message."""

    @api_gateway_handler
    def handler(event: Any, context: Any) -> JsonDict:
        raise ValueError("Invalid input data")

    resp = handler({}, SimpleNamespace(aws_request_id="req-400"))
    parsed = parse_body(resp)

    assert resp["statusCode"] == HTTPStatus.BAD_REQUEST
    assert parsed["message"] == "Invalid input data"


def test_type_error_without_message_uses_fallback() -> None:
    @api_gateway_handler
    def handler(event: Any, context: Any) -> JsonDict:
        raise TypeError()

    resp = handler({}, SimpleNamespace(aws_request_id="req-400"))

    assert resp["statusCode"] == HTTPStatus.BAD_REQUEST
    assert parse_body(resp)["message"] == "The provided data is invalid."


def test_connection_error_returns_503() -> None:
    @api_gateway_handler
    def handler(event: Any, context: Any) -> JsonDict:
        raise ConnectionError("endpoint unreachable")

    resp = handler({}, SimpleNamespace(aws_request_id="req-503"))

    assert resp["statusCode"] == HTTPStatus.SERVICE_UNAVAILABLE


def test_unexpected_error_returns_generic_500() -> None:
    @api_gateway_handler
    def handler(event: Any, context: Any) -> JsonDict:
        raise RuntimeError("secret internals")

    resp = handler({}, SimpleNamespace(aws_request_id="req-500"))
    parsed = parse_body(resp)

    assert resp["statusCode"] == HTTPStatus.INTERNAL_SERVER_ERROR
    assert "secret internals" not in parsed["message"]
