"""SQS-backed implementation of ShareDispatcher."""

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from core.infrastructure.adapters.sqs_adapter import SQSAdapter, SQSAdapterProtocol
from core.models.entry import ShareRequest
from core.models.errors import DispatchFailedError
from core.repositories.share_dispatcher import ShareDispatcher

logger = Logger(UTC=True)


class SQSShareDispatcher(ShareDispatcher):
    """Publishes share requests to the queue consumed by the chooser front end."""

    def __init__(self, adapter: SQSAdapterProtocol | None = None) -> None:
        self._sqs: SQSAdapterProtocol = adapter or SQSAdapter()

    def dispatch(self, request: ShareRequest) -> str:
        content_uri = request.payload_handle.uri
        body = request.model_dump_json(exclude_none=True)

        try:
            message_id = self._sqs.send_message(
                body=body,
                attributes={"action": request.action, "mime_type": request.mime_type},
            )

        except ClientError as exc:
            logger.error("SQS send_message failed", extra={"content_uri": content_uri})
            raise DispatchFailedError(
                message="Unable to dispatch share request",
                details={"content_uri": content_uri},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error dispatching share request")
            raise DispatchFailedError(
                message="Unable to dispatch share request",
                details={"content_uri": content_uri},
            ) from exc

        logger.info(
            "Share request dispatched",
            extra={"content_uri": content_uri, "message_id": message_id},
        )
        return message_id
