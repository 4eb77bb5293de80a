"""Pydantic models for save entry request/response."""

import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from core.utils.constants import (
    DEFAULT_SOURCE_ROOT,
    ENV_CONTENT_SOURCE_ROOT,
    MAX_DISPLAY_NAME_LENGTH,
)


def source_root() -> Path:
    """Directory that save requests may read local sources from."""
    return Path(os.getenv(ENV_CONTENT_SOURCE_ROOT) or DEFAULT_SOURCE_ROOT).resolve()


class SaveEntryRequest(BaseModel):
    """Validation model for save entry request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    file_path: StrictStr = Field(
        ...,
        min_length=1,
        description="Path of the local image file to save",
    )
    display_name: StrictStr = Field(
        ...,
        min_length=1,
        max_length=MAX_DISPLAY_NAME_LENGTH,
        description="Human-readable entry name",
    )

    @field_validator("file_path")
    @classmethod
    def validate_file_path(cls, value: str) -> str:
        # Symlinks and ".." are resolved before the containment check
        if not Path(value).resolve().is_relative_to(source_root()):
            raise ValueError("File path must be inside the source directory")
        return value


class SaveEntryResponse(BaseModel):
    """Response model for a successful save."""

    content_uri: str = Field(..., description="Shareable content URI of the entry")
    display_name: str = Field(..., description="Entry display name")
    message: str = Field(..., description="Success message")
