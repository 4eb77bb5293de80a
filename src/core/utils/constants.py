"""Global constants used throughout the application.

This module centralizes error codes, content repository defaults and
environment variable names shared by the handlers and infrastructure modules.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "INVALID_ARGUMENT"

# Entry transaction failures
ERROR_CODE_CREATE_FAILED = "CREATE_FAILED"
ERROR_CODE_WRITE_FAILED = "WRITE_FAILED"
ERROR_CODE_FINALIZE_FAILED = "FINALIZE_FAILED"

# Share failures
ERROR_CODE_INVALID_HANDLE = "INVALID_HANDLE"
ERROR_CODE_DISPATCH_FAILED = "DISPATCH_FAILED"

# Lookup failures
ERROR_CODE_QUERY_FAILED = "QUERY_FAILED"

# Repository (gateway) failures
ERROR_CODE_STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
ERROR_CODE_HANDLE_INVALID = "HANDLE_INVALID"

# Caller-facing operation errors
ERROR_CODE_SAVE_ERROR = "SAVE_ERROR"
ERROR_CODE_SHARE_ERROR = "SHARE_ERROR"
ERROR_CODE_DELETE_ERROR = "DELETE_ERROR"

# Internal / Unexpected
ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"


# ============================================================================
# Content Repository
# ============================================================================

CONTENT_URI_PREFIX: Final[str] = "content://media/external/images/media"
ENTRY_ID_PREFIX: Final[str] = "ent_"
ENTRY_ID_PATTERN = r"^[A-Za-z0-9_-]+$"

DEFAULT_ENTRY_MIME_TYPE: Final[str] = "image/jpeg"
DEFAULT_STORAGE_PATH: Final[str] = "Pictures/ObscuraSim"

# Save requests may only read local sources below this directory
DEFAULT_SOURCE_ROOT: Final[str] = "/tmp"

DISPLAY_NAME_INDEX: Final[str] = "display-name-index"
MAX_DISPLAY_NAME_LENGTH = 255

MIME_TYPE_EXTENSION_MAP: Final[dict[str, str]] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}

# Bytes copied per read from the local source
COPY_CHUNK_SIZE = 64 * 1024

# Sink buffers stay in memory up to this size before spilling to disk
SINK_SPOOL_MAX_SIZE = 8 * 1024 * 1024


# ============================================================================
# Sharing
# ============================================================================

SHARE_ACTION_SEND: Final[str] = "send"
DEFAULT_CHOOSER_TITLE: Final[str] = "Share photo"


# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "POST,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
DEFAULT_CONTENT_TYPE = "application/json"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_CONTENT_ENTRY_TABLE_NAME = "CONTENT_ENTRY_TABLE_NAME"
ENV_CONTENT_S3_BUCKET_NAME = "CONTENT_S3_BUCKET_NAME"
ENV_SHARE_QUEUE_URL = "SHARE_QUEUE_URL"
ENV_CONTENT_STAGED_VISIBILITY = "CONTENT_STAGED_VISIBILITY"
ENV_CONTENT_STORAGE_PATH = "CONTENT_STORAGE_PATH"
ENV_CONTENT_SOURCE_ROOT = "CONTENT_SOURCE_ROOT"

TRUTHY_VALUES: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})


# ============================================================================
# Helper Functions
# ============================================================================


def extension_for(mime_type: str) -> str:
    """Return the object key extension for a MIME type."""
    return MIME_TYPE_EXTENSION_MAP.get(mime_type, "bin")


def parse_flag(value: str | None, *, default: bool) -> bool:
    """Interpret an environment flag.

    Args:
        value: Raw environment value, or None when unset
        default: Value used when the flag is unset or blank

    Returns:
        True when the value is one of TRUTHY_VALUES (case-insensitive)
    """
    if value is None or not value.strip():
        return default

    return value.strip().lower() in TRUTHY_VALUES
