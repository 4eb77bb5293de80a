"""
Lambda handler responsible for saving a local image into the content repository.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import ContentStoreError, ValidationError
from core.utils.constants import ERROR_CODE_SAVE_ERROR
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import (
    parse_json_body,
    sanitize_validation_errors,
    validate_request,
)

from .models import SaveEntryRequest, SaveEntryResponse
from .service import EntryTransaction

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle save requests.

    Expected API Gateway event structure:
    {
        "body": "{\"file_path\": \"...\", \"display_name\": \"...\"}"
    }

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        201 response carrying the content URI of the new entry
    """
    request_id = getattr(context, "aws_request_id", None)
    logger.info(
        "Received save entry request",
        extra={"path": event.get("path"), "request_id": request_id},
    )

    try:
        body = parse_json_body(event)
        request = validate_request(SaveEntryRequest, body)
    except PydanticValidationError as exc:
        logger.warning("Request validation failed", extra={"errors": exc.errors()})
        return ResponseBuilder.validation_error(
            message="File path and display name are required",
            details=sanitize_validation_errors(exc.errors()),
            request_id=request_id,
        )
    except ValueError as exc:
        logger.warning("Invalid request body", extra={"error": str(exc)})
        return ResponseBuilder.validation_error(message=str(exc), request_id=request_id)

    try:
        handle = EntryTransaction().commit(request.file_path, request.display_name)

    except ValidationError as exc:
        logger.warning("Entry arguments rejected", extra={"error": exc.message})
        return ResponseBuilder.validation_error(message=exc.message, request_id=request_id)

    except ContentStoreError as exc:
        logger.exception(
            "Save to content store failed",
            extra={"display_name": request.display_name, "failure": exc.error_code},
        )
        return ResponseBuilder.operation_failed(
            exc,
            error=ERROR_CODE_SAVE_ERROR,
            prefix="Failed to save to content store",
            request_id=request_id,
        )

    response = SaveEntryResponse(
        content_uri=handle.uri,
        display_name=request.display_name,
        message="Entry saved successfully",
    )

    return ResponseBuilder.created(response.model_dump(), request_id=request_id)
