"""Content repository entry models and the outbound share request."""

from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    field_serializer,
)
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import InvalidHandleError
from core.utils.constants import (
    CONTENT_URI_PREFIX,
    DEFAULT_CHOOSER_TITLE,
    DEFAULT_ENTRY_MIME_TYPE,
    DEFAULT_STORAGE_PATH,
    ENTRY_ID_PATTERN,
    MAX_DISPLAY_NAME_LENGTH,
)


class ContentHandle(BaseModel):
    """Stable address of one repository entry.

    The string form is a content URI that can cross application
    boundaries, e.g. ``content://media/external/images/media/ent_1a2b``.
    """

    model_config = ConfigDict(frozen=True)

    entry_id: StrictStr = Field(
        ...,
        min_length=1,
        pattern=ENTRY_ID_PATTERN,
        description="Repository-assigned entry identifier",
    )

    @property
    def uri(self) -> str:
        return f"{CONTENT_URI_PREFIX}/{self.entry_id}"

    @classmethod
    def parse(cls, value: object) -> "ContentHandle":
        """Parse a content URI back into a handle.

        Raises:
            InvalidHandleError: If the URI is empty or not a string, belongs
                to another collection, or carries a malformed entry id
        """
        if not isinstance(value, str) or not value.strip():
            raise InvalidHandleError(message="Content URI is required")

        uri = value.strip()
        prefix = f"{CONTENT_URI_PREFIX}/"

        if not uri.startswith(prefix):
            raise InvalidHandleError(
                message="Content URI does not address a repository entry",
                details={"content_uri": uri},
            )

        try:
            return cls(entry_id=uri[len(prefix) :])
        except PydanticValidationError as exc:
            raise InvalidHandleError(
                message="Content URI has a malformed entry id",
                details={"content_uri": uri},
            ) from exc

    def __str__(self) -> str:
        return self.uri


class EntryMetadata(BaseModel):
    """Metadata supplied when a repository entry is created."""

    display_name: StrictStr = Field(
        ...,
        min_length=1,
        max_length=MAX_DISPLAY_NAME_LENGTH,
        description="Human-readable entry name (not unique)",
    )
    mime_type: StrictStr = Field(DEFAULT_ENTRY_MIME_TYPE, description="MIME type of the entry bytes")
    storage_path: StrictStr = Field(
        DEFAULT_STORAGE_PATH,
        min_length=1,
        description="Logical collection the entry lives in",
    )
    pending: StrictBool = Field(False, description="Hide the entry until it is finalized")


class LookupCriteria(BaseModel):
    """Criteria for a name-based repository query."""

    display_name: StrictStr = Field(..., min_length=1)
    include_pending: StrictBool = False


class LookupResult(BaseModel):
    """One entry matched by a name-based query."""

    handle: ContentHandle
    display_name: StrictStr


class ShareRequest(BaseModel):
    """Outbound request handed to the share dispatcher."""

    model_config = ConfigDict(frozen=True)

    action: Literal["send"] = "send"
    payload_handle: ContentHandle
    mime_type: StrictStr = DEFAULT_ENTRY_MIME_TYPE
    text: StrictStr | None = None
    subject: StrictStr | None = None
    grant_read_permission: StrictBool = True
    launch_as_new_task: StrictBool = True
    chooser_title: StrictStr = DEFAULT_CHOOSER_TITLE

    @field_serializer("payload_handle")
    def _serialize_payload_handle(self, handle: ContentHandle) -> str:
        return handle.uri
