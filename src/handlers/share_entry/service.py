"""Business logic for sharing a repository entry with another application."""

from aws_lambda_powertools import Logger

from core.infrastructure.aws.sqs_share_dispatcher import SQSShareDispatcher
from core.models.entry import ContentHandle, ShareRequest
from core.models.errors import ContentStoreError, DispatchFailedError, describe
from core.repositories.share_dispatcher import ShareDispatcher
from core.utils.constants import DEFAULT_ENTRY_MIME_TYPE, SHARE_ACTION_SEND

logger = Logger(UTC=True)


class ShareRequestBuilder:
    """Composes outbound share requests. Performs no I/O."""

    @staticmethod
    def build(
        handle: ContentHandle | str | None,
        text: str | None = None,
        subject: str | None = None,
    ) -> ShareRequest:
        """Build a send request for an existing entry.

        The receiving application did not create the entry, so the request
        always grants it read access to the payload.

        Raises:
            InvalidHandleError: If the handle is empty or not a content URI
        """
        if not isinstance(handle, ContentHandle):
            handle = ContentHandle.parse(handle)

        return ShareRequest(
            action=SHARE_ACTION_SEND,
            payload_handle=handle,
            mime_type=DEFAULT_ENTRY_MIME_TYPE,
            text=text,
            subject=subject,
            grant_read_permission=True,
        )


class ShareService:
    """Application service that builds a share request and dispatches it once."""

    def __init__(
        self,
        dispatcher: ShareDispatcher | None = None,
        builder: ShareRequestBuilder | None = None,
    ) -> None:
        self.builder = builder or ShareRequestBuilder()
        self.dispatcher: ShareDispatcher = dispatcher or SQSShareDispatcher()

    def share(
        self,
        content_uri: ContentHandle | str | None,
        text: str | None = None,
        subject: str | None = None,
    ) -> ShareRequest:
        """Build and dispatch a share request.

        Raises:
            InvalidHandleError: If the content URI cannot be parsed
            DispatchFailedError: If the dispatcher rejects the request
        """
        request = self.builder.build(content_uri, text=text, subject=subject)

        try:
            self.dispatcher.dispatch(request)
        except ContentStoreError:
            raise
        except Exception as exc:
            logger.exception(
                "Share dispatch failed",
                extra={"content_uri": request.payload_handle.uri},
            )
            raise DispatchFailedError(
                message=f"Unable to dispatch share request: {describe(exc)}",
                details={"content_uri": request.payload_handle.uri},
            ) from exc

        logger.info("Entry shared", extra={"content_uri": request.payload_handle.uri})
        return request
