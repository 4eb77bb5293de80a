"""
Centralized API response builder for AWS Lambda / API Gateway.
"""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any

from core.models.errors import ContentStoreError
from core.utils.constants import (
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGIN,
    DEFAULT_CONTENT_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
)
from core.utils.time import iso_timestamp

JsonDict = dict[str, Any]


class ResponseBuilder:
    """Factory for API Gateway-compatible HTTP responses."""

    DEFAULT_HEADERS: dict[str, str] = {
        "Content-Type": DEFAULT_CONTENT_TYPE,
    }

    DEFAULT_CORS_HEADERS: dict[str, str] = {
        "Access-Control-Allow-Origin": CORS_ORIGIN,
        "Access-Control-Allow-Headers": CORS_HEADERS,
        "Access-Control-Allow-Methods": CORS_METHODS,
    }

    @staticmethod
    def _build_headers(cors_origin: str | None = None) -> dict[str, str]:
        headers: dict[str, str] = dict(ResponseBuilder.DEFAULT_HEADERS)
        headers.update(ResponseBuilder.DEFAULT_CORS_HEADERS)

        if cors_origin:
            headers["Access-Control-Allow-Origin"] = cors_origin

        return headers

    @staticmethod
    def _response(
        *,
        status: HTTPStatus,
        body: JsonDict | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        payload: JsonDict = dict(body or {})

        if request_id:
            payload["request_id"] = request_id

        return {
            "statusCode": status.value,
            "headers": ResponseBuilder._build_headers(cors_origin),
            "body": json.dumps(payload),
        }

    @staticmethod
    def ok(
        body: JsonDict,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder._response(
            status=HTTPStatus.OK,
            body=body,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @staticmethod
    def created(
        body: JsonDict,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder._response(
            status=HTTPStatus.CREATED,
            body=body,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @staticmethod
    def no_content(*, cors_origin: str | None = None) -> JsonDict:
        return {
            "statusCode": HTTPStatus.NO_CONTENT.value,
            "headers": ResponseBuilder._build_headers(cors_origin),
            "body": "",
        }

    @staticmethod
    def error(
        *,
        status: HTTPStatus,
        message: str,
        error: str | None = None,
        details: JsonDict | list[Any] | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        payload: JsonDict = {
            "error": error or status.name,
            "message": message,
            "timestamp": iso_timestamp(),
        }

        if details:
            payload["details"] = details

        return ResponseBuilder._response(
            status=status,
            body=payload,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @staticmethod
    def bad_request(
        message: str,
        *,
        error: str | None = None,
        details: JsonDict | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder.error(
            status=HTTPStatus.BAD_REQUEST,
            message=message,
            error=error,
            details=details,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @staticmethod
    def validation_error(
        *,
        message: str,
        details: JsonDict | list[Any] | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """422 Unprocessable Entity with the INVALID_ARGUMENT error code."""
        return ResponseBuilder.error(
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            error=ERROR_CODE_VALIDATION_FAILED,
            message=message,
            details=details,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @staticmethod
    def operation_failed(
        exc: ContentStoreError,
        *,
        error: str,
        prefix: str,
        status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """Error response for a typed core failure.

        `details.failure` carries the failure's error code so callers can
        switch on the failure kind.
        """
        return ResponseBuilder.error(
            status=status,
            error=error,
            message=f"{prefix}: {exc.message}",
            details={"failure": exc.error_code, **exc.details},
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @staticmethod
    def internal_error(
        message: str = "Internal server error",
        *,
        error: str | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        return ResponseBuilder.error(
            status=HTTPStatus.INTERNAL_SERVER_ERROR,
            message=message,
            error=error,
            request_id=request_id,
            cors_origin=cors_origin,
        )
