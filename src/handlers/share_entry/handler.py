"""
Lambda handler responsible for sharing a content entry with another application.
"""

from http import HTTPStatus
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import ContentStoreError, InvalidHandleError
from core.utils.constants import ERROR_CODE_SHARE_ERROR
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import (
    parse_json_body,
    sanitize_validation_errors,
    validate_request,
)

from .models import ShareEntryRequest, ShareEntryResponse
from .service import ShareService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle share requests.

    The content URI is parsed, wrapped into a send request that grants the
    receiving application read access, and handed to the share dispatcher.
    """
    request_id = getattr(context, "aws_request_id", None)
    logger.info(
        "Received share entry request",
        extra={"path": event.get("path"), "request_id": request_id},
    )

    try:
        body = parse_json_body(event)
        request = validate_request(ShareEntryRequest, body)
    except PydanticValidationError as exc:
        logger.warning("Request validation failed", extra={"errors": exc.errors()})
        return ResponseBuilder.validation_error(
            message="Content URI is required",
            details=sanitize_validation_errors(exc.errors()),
            request_id=request_id,
        )
    except ValueError as exc:
        logger.warning("Invalid request body", extra={"error": str(exc)})
        return ResponseBuilder.validation_error(message=str(exc), request_id=request_id)

    try:
        ShareService().share(request.content_uri, text=request.text, subject=request.subject)

    except InvalidHandleError as exc:
        logger.warning("Invalid content URI", extra={"content_uri": request.content_uri})
        return ResponseBuilder.operation_failed(
            exc,
            error=ERROR_CODE_SHARE_ERROR,
            prefix="Failed to share",
            status=HTTPStatus.BAD_REQUEST,
            request_id=request_id,
        )

    except ContentStoreError as exc:
        logger.exception("Share failed", extra={"content_uri": request.content_uri})
        return ResponseBuilder.operation_failed(
            exc,
            error=ERROR_CODE_SHARE_ERROR,
            prefix="Failed to share",
            request_id=request_id,
        )

    response = ShareEntryResponse(
        shared=True,
        content_uri=request.content_uri,
        message="Share request dispatched",
    )

    return ResponseBuilder.ok(response.model_dump(), request_id=request_id)
