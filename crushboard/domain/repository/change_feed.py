"""Change notification interfaces.

Stores publish a RecordChange for every record a committed batch touched.
Live queries listen for changes and re-read their results.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import List, Sequence

from crushboard.domain.value import Collection, RecordChange

# record_id of the catch-all change a lagging listener receives instead of the
# changes it missed. Its post_id is None.
ANY_RECORD = "*"


class ChangeListener(ABC):
    """Receives the changes published while it is registered."""

    @abstractmethod
    async def next_changes(self) -> List[RecordChange]:
        """Wait for and return the changes published since the last call.

        Returns:
            One or more changes, oldest first
        """
        pass


class ChangeFeed(ABC):
    """Publish/subscribe hub for committed record changes."""

    @property
    @abstractmethod
    def listener_count(self) -> int:
        """Number of currently registered listeners."""
        pass

    @abstractmethod
    def publish(self, changes: Sequence[RecordChange]) -> None:
        """Deliver changes to every registered listener.

        Args:
            changes: Changes from one committed batch
        """
        pass

    @abstractmethod
    def listen(
        self, collections: set[Collection]
    ) -> AbstractAsyncContextManager[ChangeListener]:
        """Register a listener for the given collections.

        The listener is unregistered when the context exits. Nothing is
        delivered to it afterwards.

        Args:
            collections: Collections the listener is interested in
        """
        pass
