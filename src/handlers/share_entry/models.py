"""Pydantic models for share entry request/response."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class ShareEntryRequest(BaseModel):
    """Validation model for share entry request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    content_uri: StrictStr = Field(..., min_length=1, description="Content URI returned by save")
    text: StrictStr | None = Field(None, description="Optional text shared with the image")
    subject: StrictStr | None = Field(None, description="Optional subject line")


class ShareEntryResponse(BaseModel):
    """Response model for a dispatched share request."""

    shared: bool = Field(..., description="Whether the request was dispatched")
    content_uri: str = Field(..., description="Shared content URI")
    message: str = Field(..., description="Success message")
