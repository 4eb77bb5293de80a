"""Custom exception classes for the content entry service."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_CREATE_FAILED,
    ERROR_CODE_DISPATCH_FAILED,
    ERROR_CODE_FINALIZE_FAILED,
    ERROR_CODE_HANDLE_INVALID,
    ERROR_CODE_INVALID_HANDLE,
    ERROR_CODE_QUERY_FAILED,
    ERROR_CODE_STORE_UNAVAILABLE,
    ERROR_CODE_VALIDATION_FAILED,
    ERROR_CODE_WRITE_FAILED,
)


class ContentStoreError(Exception):
    """
    Base exception for all content entry service errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class _TypedFailure(ContentStoreError):
    """Content store error whose error code is fixed per subclass."""

    default_error_code: str = ""

    def __init__(
        self,
        *,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code or self.default_error_code,
            details=details,
        )


class ValidationError(_TypedFailure):
    """Raised when caller-supplied arguments are missing or malformed."""

    default_error_code = ERROR_CODE_VALIDATION_FAILED


# Repository (gateway) failures


class StoreUnavailableError(_TypedFailure):
    """Raised when the content repository rejects or cannot serve a call."""

    default_error_code = ERROR_CODE_STORE_UNAVAILABLE


class HandleInvalidError(_TypedFailure):
    """Raised when a handle does not address an existing repository entry."""

    default_error_code = ERROR_CODE_HANDLE_INVALID


# Entry transaction failures


class CreateFailedError(_TypedFailure):
    """Raised when the repository refuses to allocate an entry."""

    default_error_code = ERROR_CODE_CREATE_FAILED


class WriteFailedError(_TypedFailure):
    """Raised when opening the sink or copying bytes fails.

    The pending entry has already been rolled back (best-effort) when this
    error reaches the caller.
    """

    default_error_code = ERROR_CODE_WRITE_FAILED


class FinalizeFailedError(_TypedFailure):
    """Raised when clearing the pending flag fails after a complete write.

    The entry is left in the repository in a pending state.
    """

    default_error_code = ERROR_CODE_FINALIZE_FAILED


# Share failures


class InvalidHandleError(_TypedFailure):
    """Raised when a content URI is empty or cannot be parsed."""

    default_error_code = ERROR_CODE_INVALID_HANDLE


class DispatchFailedError(_TypedFailure):
    """Raised when a share request cannot be handed to the dispatcher."""

    default_error_code = ERROR_CODE_DISPATCH_FAILED


# Lookup failures


class QueryFailedError(_TypedFailure):
    """Raised when the name lookup itself fails."""

    default_error_code = ERROR_CODE_QUERY_FAILED


def describe(exc: BaseException) -> str:
    """Return the diagnostic message of an exception."""
    if isinstance(exc, ContentStoreError):
        return exc.message

    return str(exc) or type(exc).__name__
