"""Abstract contract for handing share requests to the platform."""

from abc import ABC, abstractmethod

from core.models.entry import ShareRequest


class ShareDispatcher(ABC):
    """Contract for the platform share dispatcher.

    The dispatcher presents a target chooser to the user. Implementations
    could be a message queue, a push channel, a local intent bridge, etc.
    """

    @abstractmethod
    def dispatch(self, request: ShareRequest) -> str:
        """Hand a share request to the platform.

        Args:
            request: Fully built share request

        Returns:
            Dispatcher-specific reference for the dispatched request

        Raises:
            DispatchFailedError: If the request cannot be handed over
        """
