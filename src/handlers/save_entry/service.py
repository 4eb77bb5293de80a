"""Business logic for saving a local image into the content repository.

The save runs as a three-phase transaction (create, write, finalize) on a
backend that is not transactional. A failed write rolls the pending entry
back so no partially written entry stays in the repository.
"""

import os
import shutil

from aws_lambda_powertools import Logger
from pydantic import ValidationError as PydanticValidationError

from core.infrastructure.aws.dynamodb_content_repository import DynamoDBContentRepository
from core.models.entry import ContentHandle, EntryMetadata
from core.models.errors import (
    CreateFailedError,
    FinalizeFailedError,
    ValidationError,
    WriteFailedError,
    describe,
)
from core.repositories.content_repository import ContentRepository
from core.utils.constants import (
    COPY_CHUNK_SIZE,
    DEFAULT_ENTRY_MIME_TYPE,
    DEFAULT_STORAGE_PATH,
    ENV_CONTENT_STORAGE_PATH,
)

logger = Logger(UTC=True)


class EntryTransaction:
    """Creates, writes and finalizes one outbound repository entry.

    Entries are always stored as JPEG in a fixed logical collection.
    Operations on the same handle must not run concurrently.
    """

    def __init__(
        self,
        gateway: ContentRepository | None = None,
        *,
        storage_path: str | None = None,
    ) -> None:
        self._gateway: ContentRepository = gateway or DynamoDBContentRepository()
        self._storage_path = (
            storage_path or os.getenv(ENV_CONTENT_STORAGE_PATH) or DEFAULT_STORAGE_PATH
        )

    def commit(self, local_source_path: str, display_name: str) -> ContentHandle:
        """Copy a local file into a new repository entry.

        The commit flow is:
        1. Insert a (pending) entry
        2. Copy the local file into the entry sink
        3. Delete the entry if step 2 fails
        4. Clear the pending flag when staged visibility is supported

        Args:
            local_source_path: Path of a fully written local image
            display_name: Human-readable entry name

        Returns:
            Handle of the committed entry

        Raises:
            ValidationError: If the display name is empty or too long
            CreateFailedError: If the entry cannot be created
            WriteFailedError: If the bytes cannot be written (entry rolled back)
            FinalizeFailedError: If the entry cannot be finalized (entry left pending)
        """
        staged = self._gateway.supports_staged_visibility()

        try:
            metadata = EntryMetadata(
                display_name=display_name,
                mime_type=DEFAULT_ENTRY_MIME_TYPE,
                storage_path=self._storage_path,
                pending=staged,
            )
        except PydanticValidationError as exc:
            raise ValidationError(
                message="Display name must be a non-empty string",
                details={"display_name": display_name},
            ) from exc

        logger.debug(
            "Starting entry commit",
            extra={"display_name": display_name, "staged": staged},
        )

        # Step 1: Create the entry
        try:
            handle = self._gateway.insert(metadata=metadata)
        except Exception as exc:
            logger.exception("Failed to create content entry", extra={"display_name": display_name})
            raise CreateFailedError(
                message=f"Failed to create content entry: {describe(exc)}",
                details={"display_name": display_name},
            ) from exc

        # Step 2: Copy the local bytes, rolling back on any failure
        try:
            with (
                self._gateway.open_for_write(handle=handle) as sink,
                open(local_source_path, "rb") as source,
            ):
                shutil.copyfileobj(source, sink, COPY_CHUNK_SIZE)
        except Exception as exc:
            logger.exception(
                "Failed to write content entry",
                extra={"content_uri": handle.uri, "source": local_source_path},
            )
            self._rollback(handle)
            raise WriteFailedError(
                message=f"Failed to write content entry: {describe(exc)}",
                details={"content_uri": handle.uri, "display_name": display_name},
            ) from exc

        # Step 3: Make the entry visible
        if staged:
            try:
                self._gateway.finalize(handle=handle)
            except Exception as exc:
                logger.exception(
                    "Failed to finalize content entry; entry left pending",
                    extra={"content_uri": handle.uri},
                )
                raise FinalizeFailedError(
                    message=f"Failed to finalize content entry: {describe(exc)}",
                    details={"content_uri": handle.uri, "display_name": display_name},
                ) from exc

        logger.info(
            "Entry committed",
            extra={"content_uri": handle.uri, "display_name": display_name},
        )
        return handle

    def _rollback(self, handle: ContentHandle) -> None:
        # Best-effort: the write error is what the caller sees
        try:
            removed = self._gateway.delete(handle=handle)
        except Exception:
            logger.warning(
                "Failed to roll back pending entry after write failure",
                extra={"content_uri": handle.uri},
            )
            return

        logger.info(
            "Pending entry rolled back",
            extra={"content_uri": handle.uri, "removed": removed},
        )
