"""
Common decorators and helpers for API Gateway Lambda handlers.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any

from aws_lambda_powertools import Logger

from core.models.errors import ContentStoreError
from core.utils.response import ResponseBuilder

logger = Logger(service="api-gateway-handler", UTC=True)

JsonDict = dict[str, Any]


def _log_error(
    message: str,
    *,
    handler_name: str,
    request_id: str | None,
    exc: Exception,
    level: str = "warning",
) -> None:
    """
    Log error with consistent structure and full context.

    Args:
        message: Log message
        handler_name: Name of the handler function
        request_id: AWS request ID
        exc: Exception that was raised
        level: Log level ('warning' or 'exception')
    """
    log_extra = {
        "handler": handler_name,
        "request_id": request_id,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    if level == "exception":
        logger.exception(message, extra=log_extra)
    else:
        log_extra["traceback"] = traceback.format_exc()
        logger.warning(message, extra=log_extra)


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Decorator for API Gateway Lambda handlers.

    Provides:
    - Automatic CORS preflight (OPTIONS) handling
    - Last-resort translation of escaped exceptions into error responses
    - Request ID tracking and structured logging

    Handlers translate the failures they expect themselves; anything that
    reaches this decorator is logged with its traceback.

    Example:
        @api_gateway_handler
        def handler(event, context):
            return ResponseBuilder.ok({"deleted": True})
    """

    @wraps(func)
    def wrapper(
        event: Any,
        context: Any,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        if event.get("httpMethod") == "OPTIONS":
            return ResponseBuilder.no_content(cors_origin=cors_origin)

        request_id = getattr(context, "aws_request_id", None)

        try:
            return func(event, context)

        except ContentStoreError as exc:
            _log_error(
                "Unhandled content store error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                level="exception",
            )
            return ResponseBuilder.internal_error(
                exc.message,
                error=exc.error_code,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except (ValueError, KeyError, TypeError) as exc:
            _log_error(
                "Invalid request in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
            )
            return ResponseBuilder.bad_request(
                str(exc) or "The provided data is invalid.",
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except (ConnectionError, TimeoutError) as exc:
            _log_error(
                "Connection error",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                level="exception",
            )
            return ResponseBuilder.error(
                status=HTTPStatus.SERVICE_UNAVAILABLE,
                message="Unable to connect to required services. Please try again later.",
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except Exception as exc:
            _log_error(
                "Unexpected error in handler",
                handler_name=func.__name__,
                request_id=request_id,
                exc=exc,
                level="exception",
            )
            return ResponseBuilder.internal_error(
                "Unexpected error occurred. Please try again in a few moments.",
                request_id=request_id,
                cors_origin=cors_origin,
            )

    return wrapper
