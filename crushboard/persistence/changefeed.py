"""In-process change feed.

Committed batches publish here; live queries of the same process listen.
Running several API processes needs a shared feed (e.g. Postgres
LISTEN/NOTIFY) in place of this one.
"""

import asyncio
from collections import deque
from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable, List, Sequence

import logfire

from crushboard.domain.repository import ChangeFeed, ChangeListener
from crushboard.domain.repository.change_feed import ANY_RECORD
from crushboard.domain.value import Collection, RecordChange


class InProcessChangeListener(ChangeListener):
    """Buffers the changes of the collections it listens to."""

    def __init__(self, collections: Iterable[Collection], max_pending: int) -> None:
        self.collections = frozenset(collections)
        self._max_pending = max_pending
        self._pending: deque[RecordChange] = deque()
        self._ready = asyncio.Event()

    def deliver(self, changes: Sequence[RecordChange]) -> None:
        """Buffer the matching changes and wake the consumer."""
        matching = [c for c in changes if c.collection in self.collections]
        if not matching:
            return

        if len(self._pending) + len(matching) > self._max_pending:
            logfire.warn(
                "Change listener fell behind, forcing re-read",
                pending=len(self._pending),
            )
            self._pending.clear()
            matching = [
                RecordChange(collection=collection, record_id=ANY_RECORD)
                for collection in sorted(self.collections)
            ]

        self._pending.extend(matching)
        self._ready.set()

    async def next_changes(self) -> List[RecordChange]:
        """Wait for and return everything buffered since the last call."""
        await self._ready.wait()
        self._ready.clear()
        changes = list(self._pending)
        self._pending.clear()
        return changes


class InProcessChangeFeed(ChangeFeed):
    """ChangeFeed delivering to listeners registered in this process."""

    def __init__(self, listener_queue_size: int = 100) -> None:
        """Initialize change feed.

        Args:
            listener_queue_size: Pending changes buffered per listener
        """
        self.listener_queue_size = listener_queue_size
        self._listeners: set[InProcessChangeListener] = set()

    @property
    def listener_count(self) -> int:
        """Number of registered listeners."""
        return len(self._listeners)

    def publish(self, changes: Sequence[RecordChange]) -> None:
        """Deliver changes to every registered listener."""
        for listener in list(self._listeners):
            listener.deliver(changes)

    @asynccontextmanager
    async def listen(
        self, collections: set[Collection]
    ) -> AsyncIterator[ChangeListener]:
        """Register a listener until the context exits."""
        listener = InProcessChangeListener(collections, self.listener_queue_size)
        self._listeners.add(listener)
        logfire.debug(
            "Change listener registered",
            collections=sorted(c.value for c in collections),
            listeners=len(self._listeners),
        )
        try:
            yield listener
        finally:
            self._listeners.discard(listener)
            logfire.debug(
                "Change listener removed", listeners=len(self._listeners)
            )
