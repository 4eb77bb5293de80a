"""Pydantic models for delete entry request/response."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr

from core.utils.constants import MAX_DISPLAY_NAME_LENGTH


class DeleteEntryRequest(BaseModel):
    """Validation model for delete entry request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    display_name: StrictStr = Field(
        ...,
        min_length=1,
        max_length=MAX_DISPLAY_NAME_LENGTH,
        description="Display name of the entry to delete",
    )


class DeleteEntryResponse(BaseModel):
    """Response model for a processed delete request."""

    deleted: bool = Field(..., description="Whether an entry was removed")
    display_name: str = Field(..., description="Requested display name")
    message: str = Field(..., description="Outcome message")
