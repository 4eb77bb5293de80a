"""Business logic for removing a repository entry by display name.

Display names are not unique. When several entries share a name, the first
one returned by the repository is removed and the rest are left alone.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_content_repository import DynamoDBContentRepository
from core.models.entry import LookupCriteria, LookupResult
from core.models.errors import QueryFailedError, describe
from core.repositories.content_repository import ContentRepository

logger = Logger(UTC=True)


class EntryLookupAndDelete:
    """Resolves a display name to one entry and removes it."""

    def __init__(self, gateway: ContentRepository | None = None) -> None:
        self._gateway: ContentRepository = gateway or DynamoDBContentRepository()

    def remove(self, display_name: str) -> bool:
        """Remove the first entry named `display_name`.

        The lookup includes pending entries so that an entry stuck after a
        failed finalize can still be removed.

        Returns:
            True if an entry was deleted, False if none matched or the
            delete did not remove a row

        Raises:
            QueryFailedError: If the lookup itself fails
        """
        logger.debug("Starting entry removal", extra={"display_name": display_name})

        match = self._first_match(display_name)

        if match is None:
            logger.info("No entry to delete", extra={"display_name": display_name})
            return False

        try:
            removed = self._gateway.delete(handle=match.handle)
        except Exception:
            logger.warning(
                "Entry delete failed; reporting not deleted",
                extra={"content_uri": match.handle.uri, "display_name": display_name},
            )
            return False

        logger.info(
            "Entry removal finished",
            extra={
                "content_uri": match.handle.uri,
                "display_name": display_name,
                "removed": removed,
            },
        )
        return removed

    def _first_match(self, display_name: str) -> LookupResult | None:
        try:
            results = self._gateway.query(
                criteria=LookupCriteria(display_name=display_name, include_pending=True)
            )
            return next(iter(results), None)
        except Exception as exc:
            logger.exception("Entry lookup failed", extra={"display_name": display_name})
            raise QueryFailedError(
                message=f"Failed to look up content entry: {describe(exc)}",
                details={"display_name": display_name},
            ) from exc
