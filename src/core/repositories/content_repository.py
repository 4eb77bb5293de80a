"""Abstract contract for the shared content repository."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from types import TracebackType
from typing import Protocol

from core.models.entry import ContentHandle, EntryMetadata, LookupCriteria, LookupResult


class WritableSink(Protocol):
    """Single-use output sink for the bytes of one entry.

    Sinks are context managers: a clean exit commits the written bytes,
    exiting with an exception discards them.
    """

    def write(self, data: bytes) -> int: ...

    def close(self) -> None: ...

    def __enter__(self) -> "WritableSink": ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...


class ContentRepository(ABC):
    """Contract for the platform content repository.

    This is the only seam that touches the backing store. Services receive
    an instance at construction and never reach the store directly.
    """

    @abstractmethod
    def supports_staged_visibility(self) -> bool:
        """Return whether entries can be hidden until finalized."""

    @abstractmethod
    def insert(self, *, metadata: EntryMetadata) -> ContentHandle:
        """Create a new entry without writing any bytes.

        The entry is marked pending when `metadata.pending` is set and the
        repository supports staged visibility.

        Raises:
            StoreUnavailableError: If the entry cannot be allocated
        """

    @abstractmethod
    def open_for_write(self, *, handle: ContentHandle) -> WritableSink:
        """Open a scoped, single-use sink for the entry's bytes.

        Raises:
            HandleInvalidError: If the handle does not address an entry
            StoreUnavailableError: If the repository cannot be reached
        """

    @abstractmethod
    def finalize(self, *, handle: ContentHandle) -> None:
        """Clear the pending flag, making the entry complete.

        No-op when staged visibility is not supported.

        Raises:
            HandleInvalidError: If the handle does not address an entry
            StoreUnavailableError: If the update fails
        """

    @abstractmethod
    def delete(self, *, handle: ContentHandle) -> bool:
        """Remove the entry and its bytes.

        Returns:
            True if a row was actually removed

        Raises:
            StoreUnavailableError: If deletion fails
        """

    @abstractmethod
    def query(self, *, criteria: LookupCriteria) -> Iterator[LookupResult]:
        """List matching entries in repository-defined order.

        The returned iterator is finite and not restartable. Backend
        failures surface while iterating.

        Raises:
            StoreUnavailableError: If the query fails
        """
