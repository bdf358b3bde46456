"""In-memory write batches for testing."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Sequence

from sqlalchemy.exc import IntegrityError

from crushboard.domain.error import NotFoundError, VoteConflictError
from crushboard.domain.model import Post, Reply, Vote
from crushboard.domain.repository import (
    ChangeFeed,
    RecordReader,
    RecordStore,
    WriteBatch,
)
from crushboard.domain.repository.batch import (
    BatchOperation,
    CreatePost,
    CreateReply,
    DeleteVote,
    IncrementPost,
    PutVote,
)
from crushboard.domain.value import PostId, UserId

from .post import InMemoryPostRepository
from .reply import InMemoryReplyRepository
from .store import InMemoryStore
from .vote import InMemoryVoteRepository


class InMemoryWriteBatch(WriteBatch):
    """WriteBatch over an InMemoryStore.

    Operations are staged against a copy-on-write view first; the store is
    only touched once every precondition holds.
    """

    def __init__(self, store: InMemoryStore, change_feed: ChangeFeed) -> None:
        super().__init__(change_feed)
        self._store = store

    async def _apply(self, operations: Sequence[BatchOperation]) -> None:
        async with self._store.lock:
            posts: dict[PostId, Post] = {}
            votes: dict[tuple[UserId, PostId], Optional[Vote]] = {}
            replies: list[Reply] = []

            def post_of(post_id: PostId) -> Optional[Post]:
                return posts.get(post_id) or self._store.posts.get(post_id)

            def vote_of(key: tuple[UserId, PostId]) -> Optional[Vote]:
                return votes[key] if key in votes else self._store.votes.get(key)

            for op in operations:
                if isinstance(op, CreatePost):
                    posts[op.post.id] = op.post.model_copy(
                        update={"created_at": self._store.now()}
                    )

                elif isinstance(op, PutVote):
                    key = (op.vote.user_id, op.vote.post_id)
                    existing = vote_of(key)
                    if (existing.direction if existing else None) != op.expected:
                        raise VoteConflictError(str(key[0]), str(key[1]))
                    votes[key] = op.vote

                elif isinstance(op, DeleteVote):
                    key = (op.user_id, op.post_id)
                    existing = vote_of(key)
                    if existing is None or existing.direction != op.expected:
                        raise VoteConflictError(str(key[0]), str(key[1]))
                    votes[key] = None

                elif isinstance(op, CreateReply):
                    if post_of(op.reply.post_id) is None:
                        raise NotFoundError("Post", str(op.reply.post_id))
                    replies.append(
                        op.reply.model_copy(update={"created_at": self._store.now()})
                    )

                elif isinstance(op, IncrementPost):
                    post = post_of(op.post_id)
                    if post is None:
                        raise NotFoundError("Post", str(op.post_id))
                    updated = post.model_copy(
                        update={
                            "upvotes": post.upvotes + op.upvotes,
                            "downvotes": post.downvotes + op.downvotes,
                            "score": post.score + op.score,
                            "reply_count": post.reply_count + op.reply_count,
                        }
                    )
                    if min(updated.upvotes, updated.downvotes, updated.reply_count) < 0:
                        # Mirrors the counter CHECK constraints of the posts table
                        raise IntegrityError(
                            f"Negative counter on post {op.post_id}", None, Exception()
                        )
                    posts[op.post_id] = updated

            self._store.posts.update(posts)
            for key, vote in votes.items():
                if vote is None:
                    self._store.votes.pop(key, None)
                else:
                    self._store.votes[key] = vote
            for reply in replies:
                self._store.replies[reply.id] = reply


class InMemoryRecordStore(RecordStore):
    """RecordStore handing out InMemoryWriteBatch instances and readers."""

    def __init__(self, store: InMemoryStore, change_feed: ChangeFeed) -> None:
        self._store = store
        self._change_feed = change_feed

    def batch(self) -> WriteBatch:
        """Start a new, empty batch."""
        return InMemoryWriteBatch(self._store, self._change_feed)

    @asynccontextmanager
    async def reader(self) -> AsyncIterator[RecordReader]:
        yield RecordReader(
            posts=InMemoryPostRepository(self._store),
            votes=InMemoryVoteRepository(self._store),
            replies=InMemoryReplyRepository(self._store),
        )
