"""Unit tests for request validation utilities."""

from typing import Any

import pytest
from pydantic import BaseModel, Field, ValidationError

from core.utils.validators import (
    parse_json_body,
    sanitize_validation_errors,
    validate_request,
)


class SampleModel(BaseModel):
    """Sample model for validation tests."""

    name: str = Field(..., min_length=1)
    count: int


class TestSanitizeValidationErrors:
    """Tests for sanitize_validation_errors."""

    def test_missing_field(self) -> None:
        errors: list[dict[str, Any]] = [{"loc": ("name",), "msg": "Field required", "type": "missing"}]

        assert sanitize_validation_errors(errors) == [
            {"field": "name", "message": "This field is required"}
        ]

    def test_empty_string(self) -> None:
        errors: list[dict[str, Any]] = [
            {"loc": ("display_name",), "msg": "too short", "type": "string_too_short"}
        ]

        assert sanitize_validation_errors(errors) == [
            {"field": "display_name", "message": "This field must be a non-empty string"}
        ]

    def test_strips_value_error_prefix(self) -> None:
        errors: list[dict[str, Any]] = [
            {"loc": ("count",), "msg": "Value error, must be positive", "type": "value_error"}
        ]

        assert sanitize_validation_errors(errors)[0]["message"] == "must be positive"

    def test_missing_location_defaults_to_body(self) -> None:
        result = sanitize_validation_errors([{"msg": "bad"}])

        assert result == [{"field": "body", "message": "bad"}]

    def test_drops_internal_fields(self) -> None:
        errors: list[dict[str, Any]] = [
            {
                "loc": ("name",),
                "msg": "bad",
                "input": "secret",
                "ctx": {"x": 1},
                "url": "https://errors.pydantic.dev",
            }
        ]

        assert set(sanitize_validation_errors(errors)[0]) == {"field", "message"}


class TestParseJsonBody:
    def test_parses_object(self) -> None:
        assert parse_json_body({"body": '{"a": 1}'}) == {"a": 1}

    def test_missing_body_is_empty_object(self) -> None:
        assert parse_json_body({}) == {}

    def test_invalid_json(self) -> None:
        with pytest.raises(ValueError, match="Invalid JSON body"):
            parse_json_body({"body": "{not json"})

    def test_non_object_json(self) -> None:
        with pytest.raises(ValueError, match="expected an object"):
            parse_json_body({"body": "[1, 2]"})


class TestValidateRequest:
    def test_valid_data(self) -> None:
        model = validate_request(SampleModel, {"name": "a", "count": 2})

        assert model.name == "a"
        assert model.count == 2

    def test_invalid_data_raises(self) -> None:
        with pytest.raises(ValidationError):
            validate_request(SampleModel, {"name": ""})
