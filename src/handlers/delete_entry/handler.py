"""
Lambda handler responsible for deleting a content entry by display name.
"""

from typing import Any
from urllib.parse import unquote

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import QueryFailedError
from core.utils.constants import ERROR_CODE_DELETE_ERROR
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import DeleteEntryRequest, DeleteEntryResponse
from .service import EntryLookupAndDelete

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle delete requests.

    This function:
    - Extracts the display name from API Gateway path parameters
    - Validates the incoming request
    - Delegates lookup and deletion to the service layer

    A name with no matching entry is a normal outcome (`deleted: false`).
    """
    request_id = getattr(context, "aws_request_id", None)
    logger.info(
        "Received delete entry request",
        extra={"path": event.get("path"), "request_id": request_id},
    )

    path_params = event.get("pathParameters") or {}
    raw_name = path_params.get("display_name")

    try:
        request = validate_request(
            DeleteEntryRequest,
            {"display_name": unquote(raw_name) if isinstance(raw_name, str) else raw_name},
        )
    except PydanticValidationError as exc:
        logger.warning("Request validation failed", extra={"errors": exc.errors()})
        return ResponseBuilder.validation_error(
            message="File name is required",
            details=sanitize_validation_errors(exc.errors()),
            request_id=request_id,
        )

    try:
        deleted = EntryLookupAndDelete().remove(request.display_name)

    except QueryFailedError as exc:
        logger.exception("Delete lookup failed", extra={"display_name": request.display_name})
        return ResponseBuilder.operation_failed(
            exc,
            error=ERROR_CODE_DELETE_ERROR,
            prefix="Failed to delete from content store",
            request_id=request_id,
        )

    response = DeleteEntryResponse(
        deleted=deleted,
        display_name=request.display_name,
        message="Entry deleted successfully" if deleted else "No matching entry deleted",
    )

    return ResponseBuilder.ok(response.model_dump(), request_id=request_id)
