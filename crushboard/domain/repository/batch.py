"""Atomic multi-record write batches.

A WriteBatch accumulates create/update/delete operations and applies all of
them in one atomic commit. Counter updates are signed increments applied by
the store, so batches from different writers commute.

Vote ledger writes carry the direction the caller read before building the
batch. If the ledger no longer matches at commit time the whole batch fails
with VoteConflictError.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from crushboard.domain.model import Post, Reply, Vote
from crushboard.domain.repository.change_feed import ChangeFeed
from crushboard.domain.repository.reader import RecordReader
from crushboard.domain.value import (
    Collection,
    PostId,
    RecordChange,
    UserId,
    VoteDirection,
)


@dataclass(frozen=True)
class CreatePost:
    post: Post


@dataclass(frozen=True)
class PutVote:
    vote: Vote
    expected: Optional[VoteDirection]


@dataclass(frozen=True)
class DeleteVote:
    user_id: UserId
    post_id: PostId
    expected: VoteDirection


@dataclass(frozen=True)
class CreateReply:
    reply: Reply


@dataclass(frozen=True)
class IncrementPost:
    post_id: PostId
    upvotes: int = 0
    downvotes: int = 0
    score: int = 0
    reply_count: int = 0


BatchOperation = Union[CreatePost, PutVote, DeleteVote, CreateReply, IncrementPost]


def _change_for(operation: BatchOperation) -> RecordChange:
    """Describe the record an operation touches."""
    if isinstance(operation, CreatePost):
        post_id = str(operation.post.id)
        return RecordChange(
            collection=Collection.POSTS, record_id=post_id, post_id=post_id
        )
    if isinstance(operation, IncrementPost):
        post_id = str(operation.post_id)
        return RecordChange(
            collection=Collection.POSTS, record_id=post_id, post_id=post_id
        )
    if isinstance(operation, CreateReply):
        return RecordChange(
            collection=Collection.REPLIES,
            record_id=str(operation.reply.id),
            post_id=str(operation.reply.post_id),
        )
    if isinstance(operation, PutVote):
        user_id, post_id = operation.vote.user_id, operation.vote.post_id
    else:
        user_id, post_id = operation.user_id, operation.post_id
    return RecordChange(
        collection=Collection.VOTES,
        record_id=f"{user_id}_{post_id}",
        post_id=str(post_id),
    )


class WriteBatch(ABC):
    """Accumulates writes and commits them atomically.

    Implementations only provide _apply(); publishing change notifications
    after a successful commit is handled here.
    """

    def __init__(self, change_feed: ChangeFeed) -> None:
        self._change_feed = change_feed
        self._operations: list[BatchOperation] = []
        self._committed = False

    @property
    def operations(self) -> tuple[BatchOperation, ...]:
        """Operations accumulated so far."""
        return tuple(self._operations)

    def create_post(self, post: Post) -> "WriteBatch":
        """Create a post. The store assigns created_at."""
        return self._add(CreatePost(post=post))

    def put_vote(
        self, vote: Vote, expected: Optional[VoteDirection] = None
    ) -> "WriteBatch":
        """Create or overwrite the vote of (vote.user_id, vote.post_id).

        Args:
            vote: New ledger record
            expected: Direction currently stored (None when no vote exists)
        """
        return self._add(PutVote(vote=vote, expected=expected))

    def delete_vote(
        self, user_id: UserId, post_id: PostId, expected: VoteDirection
    ) -> "WriteBatch":
        """Delete the vote of (user_id, post_id), which must be ``expected``."""
        return self._add(DeleteVote(user_id=user_id, post_id=post_id, expected=expected))

    def create_reply(self, reply: Reply) -> "WriteBatch":
        """Create a reply. The store assigns created_at."""
        return self._add(CreateReply(reply=reply))

    def increment_post(
        self,
        post_id: PostId,
        *,
        upvotes: int = 0,
        downvotes: int = 0,
        score: int = 0,
        reply_count: int = 0,
    ) -> "WriteBatch":
        """Apply signed increments to a post's counters.

        Raises NotFoundError at commit time if the post does not exist.
        """
        return self._add(
            IncrementPost(
                post_id=post_id,
                upvotes=upvotes,
                downvotes=downvotes,
                score=score,
                reply_count=reply_count,
            )
        )

    async def commit(self) -> list[RecordChange]:
        """Apply all operations atomically and notify listeners.

        Returns:
            Changes published for this batch

        Raises:
            VoteConflictError: If a vote precondition no longer holds
            NotFoundError: If an incremented post does not exist
            RuntimeError: If the batch was already committed
        """
        if self._committed:
            raise RuntimeError("Batch already committed")

        operations = self.operations
        if operations:
            await self._apply(operations)
        self._committed = True

        changes = [_change_for(op) for op in operations]
        if changes:
            self._change_feed.publish(changes)
        return changes

    def _add(self, operation: BatchOperation) -> "WriteBatch":
        if self._committed:
            raise RuntimeError("Batch already committed")
        self._operations.append(operation)
        return self

    @abstractmethod
    async def _apply(self, operations: Sequence[BatchOperation]) -> None:
        """Apply operations all-or-nothing.

        Args:
            operations: Operations in the order they were added
        """
        pass


class RecordStore(ABC):
    """Factory for write batches and short-lived readers."""

    @abstractmethod
    def batch(self) -> WriteBatch:
        """Start a new, empty batch."""
        pass

    @abstractmethod
    def reader(self) -> AbstractAsyncContextManager[RecordReader]:
        """Open repositories for the reads behind one snapshot.

        Whatever the reader holds (a pooled connection for PostgreSQL) is
        released when the context exits.
        """
        pass
