"""DynamoDB + S3 backed implementation of ContentRepository.

Entry rows (display name, MIME type, logical collection, pending flag) live
in DynamoDB; entry bytes live in S3 under ``<storage_path>/<entry_id>.<ext>``.
"""

from collections.abc import Iterator
import os
import tempfile
from types import TracebackType
from typing import Any
import uuid

from aws_lambda_powertools import Logger
from boto3.dynamodb.conditions import Attr, Key
from botocore.exceptions import ClientError

from core.infrastructure.adapters.dynamodb_adapter import (
    DynamoDBAdapter,
    DynamoDBAdapterProtocol,
)
from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.entry import ContentHandle, EntryMetadata, LookupCriteria, LookupResult
from core.models.errors import HandleInvalidError, StoreUnavailableError
from core.repositories.content_repository import ContentRepository
from core.utils.constants import (
    DISPLAY_NAME_INDEX,
    ENTRY_ID_PREFIX,
    ENV_CONTENT_STAGED_VISIBILITY,
    SINK_SPOOL_MAX_SIZE,
    extension_for,
    parse_flag,
)
from core.utils.time import iso_timestamp

Row = dict[str, Any]

logger = Logger(UTC=True)


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


class S3EntrySink:
    """Single-use sink that spools entry bytes and uploads them on close."""

    def __init__(
        self,
        *,
        storage: S3AdapterProtocol,
        key: str,
        content_type: str,
        metadata: dict[str, str],
    ) -> None:
        self._storage = storage
        self._key = key
        self._content_type = content_type
        self._metadata = metadata
        self._buffer = tempfile.SpooledTemporaryFile(max_size=SINK_SPOOL_MAX_SIZE)
        self._closed = False
        self.bytes_written = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data: bytes) -> int:
        if self._closed:
            raise ValueError("write to a closed entry sink")

        written = self._buffer.write(data)
        self.bytes_written += written
        return written

    def close(self) -> None:
        """Upload the spooled bytes and release the buffer.

        Raises:
            StoreUnavailableError: If the upload fails
        """
        if self._closed:
            return

        self._closed = True

        try:
            self._buffer.seek(0)
            self._storage.upload_fileobj(
                key=self._key,
                fileobj=self._buffer,
                content_type=self._content_type,
                metadata=self._metadata,
            )
            logger.debug(
                "Entry bytes uploaded",
                extra={"key": self._key, "size": self.bytes_written},
            )

        except Exception as exc:
            logger.exception("Entry byte upload failed", extra={"key": self._key})
            raise StoreUnavailableError(
                message="Unable to write entry bytes",
                details={"key": self._key},
            ) from exc

        finally:
            self._buffer.close()

    def discard(self) -> None:
        """Drop the spooled bytes without uploading them."""
        if self._closed:
            return

        self._closed = True
        self._buffer.close()
        logger.debug("Entry bytes discarded", extra={"key": self._key})

    def __enter__(self) -> "S3EntrySink":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.close()
        else:
            self.discard()


class DynamoDBContentRepository(ContentRepository):
    """Content repository backed by a DynamoDB entry table and an S3 bucket.

    All boto3 errors are caught and translated into
    domain-specific errors with stable semantics.
    """

    def __init__(
        self,
        adapter: DynamoDBAdapterProtocol | None = None,
        storage: S3AdapterProtocol | None = None,
        *,
        staged_visibility: bool | None = None,
    ) -> None:
        """Initialize with DynamoDB and S3 adapters.

        Staged visibility defaults to the CONTENT_STAGED_VISIBILITY flag
        (enabled when unset).
        """
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter()
        self._storage: S3AdapterProtocol = storage or S3Adapter()

        if staged_visibility is None:
            staged_visibility = parse_flag(
                os.getenv(ENV_CONTENT_STAGED_VISIBILITY),
                default=True,
            )
        self._staged_visibility = staged_visibility

    @staticmethod
    def generate_entry_id() -> str:
        """Generate a unique entry identifier."""
        return f"{ENTRY_ID_PREFIX}{uuid.uuid4().hex}"

    def supports_staged_visibility(self) -> bool:
        return self._staged_visibility

    def insert(self, *, metadata: EntryMetadata) -> ContentHandle:
        entry_id = self.generate_entry_id()
        pending = metadata.pending and self._staged_visibility
        object_key = f"{metadata.storage_path}/{entry_id}.{extension_for(metadata.mime_type)}"

        item: Row = {
            "entry_id": entry_id,
            "display_name": metadata.display_name,
            "mime_type": metadata.mime_type,
            "storage_path": metadata.storage_path,
            "object_key": object_key,
            "is_pending": pending,
            "created_at": iso_timestamp(),
        }

        logger.debug(
            "Inserting entry",
            extra={"entry_id": entry_id, "display_name": metadata.display_name, "pending": pending},
        )

        try:
            self._db.put_item(
                item=item,
                condition_expression="attribute_not_exists(entry_id)",
            )

        except ClientError as exc:
            logger.error(
                "DynamoDB put_item failed",
                extra={"entry_id": entry_id, "error_code": _error_code(exc)},
            )
            raise StoreUnavailableError(
                message="Unable to create content entry",
                details={"entry_id": entry_id, "display_name": metadata.display_name},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error inserting entry")
            raise StoreUnavailableError(
                message="Unable to create content entry",
                details={"entry_id": entry_id, "display_name": metadata.display_name},
            ) from exc

        logger.info("Entry inserted", extra={"entry_id": entry_id, "pending": pending})
        return ContentHandle(entry_id=entry_id)

    def open_for_write(self, *, handle: ContentHandle) -> S3EntrySink:
        row = self._fetch_row(handle)

        if row is None:
            logger.warning("Open for write on unknown entry", extra={"entry_id": handle.entry_id})
            raise HandleInvalidError(
                message="Content entry does not exist",
                details={"content_uri": handle.uri},
            )

        return S3EntrySink(
            storage=self._storage,
            key=row["object_key"],
            content_type=row.get("mime_type", "application/octet-stream"),
            metadata={"entry_id": handle.entry_id},
        )

    def finalize(self, *, handle: ContentHandle) -> None:
        if not self._staged_visibility:
            logger.debug("Staged visibility unsupported; finalize skipped")
            return

        try:
            self._db.update_item(
                key={"entry_id": handle.entry_id},
                update_expression="SET is_pending = :pending, updated_at = :updated_at",
                expression_values={":pending": False, ":updated_at": iso_timestamp()},
                condition_expression="attribute_exists(entry_id)",
            )

        except ClientError as exc:
            logger.error("DynamoDB update_item failed", extra={"entry_id": handle.entry_id})

            if _error_code(exc) == "ConditionalCheckFailedException":
                raise HandleInvalidError(
                    message="Content entry does not exist",
                    details={"content_uri": handle.uri},
                ) from exc

            raise StoreUnavailableError(
                message="Unable to finalize content entry",
                details={"content_uri": handle.uri},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error finalizing entry")
            raise StoreUnavailableError(
                message="Unable to finalize content entry",
                details={"content_uri": handle.uri},
            ) from exc

        logger.info("Entry finalized", extra={"entry_id": handle.entry_id})

    def delete(self, *, handle: ContentHandle) -> bool:
        """Remove the entry bytes first, then the entry row."""
        row = self._fetch_row(handle)

        if row is None:
            logger.debug("Delete on unknown entry", extra={"entry_id": handle.entry_id})
            return False

        try:
            object_key = row.get("object_key")
            if object_key:
                self._storage.delete_object(key=object_key)

            response = self._db.delete_item(
                key={"entry_id": handle.entry_id},
                return_values="ALL_OLD",
            )

        except Exception as exc:
            logger.exception("Entry deletion failed", extra={"entry_id": handle.entry_id})
            raise StoreUnavailableError(
                message="Unable to delete content entry",
                details={"content_uri": handle.uri},
            ) from exc

        removed = bool(response.get("Attributes"))
        logger.info("Entry deleted", extra={"entry_id": handle.entry_id, "removed": removed})
        return removed

    def query(self, *, criteria: LookupCriteria) -> Iterator[LookupResult]:
        query_kwargs: dict[str, Any] = {
            "IndexName": DISPLAY_NAME_INDEX,
            "KeyConditionExpression": Key("display_name").eq(criteria.display_name),
        }

        if not criteria.include_pending:
            query_kwargs["FilterExpression"] = Attr("is_pending").eq(False)

        return self._iter_query(query_kwargs, display_name=criteria.display_name)

    def _iter_query(self, query_kwargs: dict[str, Any], *, display_name: str) -> Iterator[LookupResult]:
        logger.debug("Querying entries", extra={"display_name": display_name})

        last_evaluated_key: dict[str, Any] | None = None

        while True:
            if last_evaluated_key:
                query_kwargs["ExclusiveStartKey"] = last_evaluated_key

            try:
                response = self._db.query(**query_kwargs)
            except Exception as exc:
                logger.exception("DynamoDB query failed", extra={"display_name": display_name})
                raise StoreUnavailableError(
                    message="Unable to query content entries",
                    details={"display_name": display_name},
                ) from exc

            items = response.get("Items", [])
            if not isinstance(items, list):
                raise StoreUnavailableError(
                    message="Invalid query response from DynamoDB",
                    details={"display_name": display_name},
                )

            for item in items:
                yield LookupResult(
                    handle=ContentHandle(entry_id=item["entry_id"]),
                    display_name=item["display_name"],
                )

            last_evaluated_key = response.get("LastEvaluatedKey")
            if not last_evaluated_key:
                break

    def _fetch_row(self, handle: ContentHandle) -> Row | None:
        try:
            response = self._db.get_item(
                key={"entry_id": handle.entry_id},
                consistent_read=True,
            )
        except Exception as exc:
            logger.exception("DynamoDB get_item failed", extra={"entry_id": handle.entry_id})
            raise StoreUnavailableError(
                message="Unable to read content entry",
                details={"content_uri": handle.uri},
            ) from exc

        item = response.get("Item")
        if item is None:
            return None

        if not isinstance(item, dict):
            raise StoreUnavailableError(
                message="Invalid content entry format",
                details={"content_uri": handle.uri},
            )

        return item
