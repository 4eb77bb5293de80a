"""Request validation utilities."""

import json
from typing import Any, TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Sanitize Pydantic validation errors for API responses.

    Removes sensitive/internal fields like:
    - url
    - ctx
    - input
    """
    sanitized: list[dict[str, str]] = []

    for err in errors:
        field = ".".join(str(x) for x in err.get("loc", [])) or "body"
        msg = str(err.get("msg", "Invalid value")).replace("Value error,", "").strip()

        error_type = err.get("type", "")
        if error_type == "missing":
            msg = "This field is required"
        elif error_type in {"string_too_short", "string_type"}:
            msg = "This field must be a non-empty string"

        sanitized.append({"field": field, "message": msg})

    return sanitized


def parse_json_body(event: dict[str, Any]) -> dict[str, Any]:
    """Decode the JSON body of an API Gateway proxy event.

    Raises:
        ValueError: If the body is not a JSON object
    """
    try:
        body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError as exc:
        raise ValueError("Invalid JSON body") from exc

    if not isinstance(body, dict):
        raise ValueError("Invalid JSON body: expected an object")

    return body


def validate_request(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Validate request data against a Pydantic model.

    Raises:
        pydantic.ValidationError: If the data does not satisfy the model
    """
    return model.model_validate(data)
