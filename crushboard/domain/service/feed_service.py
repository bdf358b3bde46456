"""Feed domain service.

Live views over the post feed and a single post's detail. A view emits an
initial snapshot, then re-reads and emits a fresh snapshot whenever a
committed batch touches something it shows. Views are async context
managers: leaving the context unregisters the listener, so nothing is
delivered after teardown.

Every snapshot is read through its own ``RecordStore.reader()``; nothing is
held open while a view waits for the next change.
"""

from contextlib import asynccontextmanager
from typing import (
    AsyncIterator,
    Awaitable,
    Callable,
    Iterable,
    Optional,
    Sequence,
    TypeVar,
)

import logfire
from pydantic import BaseModel

from crushboard.domain.model import Post, Reply
from crushboard.domain.repository import (
    ChangeFeed,
    ChangeListener,
    RecordReader,
    RecordStore,
)
from crushboard.domain.value import (
    Collection,
    PostFilter,
    PostId,
    RecordChange,
    UserId,
    VoteDirection,
)

from .base import Service

S = TypeVar("S")


class FeedSnapshot(BaseModel):
    """Posts in feed order plus the viewer's vote on each of them.

    ``my_votes`` only holds posts the viewer has voted on, and is empty for
    anonymous viewers.
    """

    posts: list[Post]
    my_votes: dict[PostId, VoteDirection] = {}


class PostDetailSnapshot(BaseModel):
    """A post and its replies as seen at one point in time.

    ``post`` is None when the post does not exist.
    """

    post: Optional[Post]
    replies: list[Reply]
    my_vote: Optional[VoteDirection] = None


class FeedService(Service):
    """Domain service for live feed queries."""

    span_prefix = "feed_service"

    def __init__(self, record_store: RecordStore, change_feed: ChangeFeed) -> None:
        """Initialize feed service.

        Args:
            record_store: Source of short-lived readers
            change_feed: Source of committed record changes
        """
        self.record_store = record_store
        self.change_feed = change_feed

    @asynccontextmanager
    async def watch_posts(
        self, post_filter: PostFilter, viewer: Optional[UserId] = None
    ) -> AsyncIterator[AsyncIterator[FeedSnapshot]]:
        """Open a live post feed.

        Any post change triggers a re-read, since a vote or a new post can
        move any post in or out of the window. Snapshots equal to the
        previous one, viewer votes included, are not emitted.

        Args:
            post_filter: Sort mode, tag filter and limit
            viewer: User whose votes are attached, if signed in

        Yields:
            Async iterator of feed snapshots
        """

        async def read(reader: RecordReader) -> FeedSnapshot:
            posts = await reader.posts.find_all(post_filter)
            return FeedSnapshot(
                posts=posts, my_votes=await _votes_of(reader, viewer, posts)
            )

        with self.span(
            "watch_posts",
            sort=post_filter.sort.value,
            tag=post_filter.tag.value if post_filter.tag else None,
        ):
            async with self.change_feed.listen(
                {Collection.POSTS, Collection.VOTES}
            ) as listener:
                yield self._snapshots(listener, read, lambda changes: True)
            logfire.info("Post feed closed")

    @asynccontextmanager
    async def watch_post(
        self, post_id: PostId, viewer: Optional[UserId] = None
    ) -> AsyncIterator[AsyncIterator[PostDetailSnapshot]]:
        """Open a live view of one post and its replies.

        Args:
            post_id: Post ID
            viewer: User whose vote is attached, if signed in

        Yields:
            Async iterator of post detail snapshots
        """

        async def read(reader: RecordReader) -> PostDetailSnapshot:
            post = await reader.posts.find_by_id(post_id)
            if post is None:
                return PostDetailSnapshot(post=None, replies=[])
            my_votes = await _votes_of(reader, viewer, [post])
            return PostDetailSnapshot(
                post=post,
                replies=await reader.replies.find_by_post(post_id),
                my_vote=my_votes.get(post.id),
            )

        with self.span("watch_post", post_id=str(post_id)):
            async with self.change_feed.listen(
                {Collection.POSTS, Collection.VOTES, Collection.REPLIES}
            ) as listener:
                yield self._snapshots(
                    listener, read, lambda changes: _touches_post(changes, post_id)
                )

    async def _snapshots(
        self,
        listener: ChangeListener,
        read: Callable[[RecordReader], Awaitable[S]],
        is_relevant: Callable[[Sequence[RecordChange]], bool],
    ) -> AsyncIterator[S]:
        snapshot = await self._read(read)
        yield snapshot

        while True:
            changes = await listener.next_changes()
            if not is_relevant(changes):
                continue

            fresh = await self._read(read)
            if fresh == snapshot:
                continue
            logfire.debug("Live query refreshed", changes=len(changes))
            snapshot = fresh
            yield snapshot

    async def _read(self, read: Callable[[RecordReader], Awaitable[S]]) -> S:
        async with self.record_store.reader() as reader:
            return await read(reader)


async def _votes_of(
    reader: RecordReader, viewer: Optional[UserId], posts: list[Post]
) -> dict[PostId, VoteDirection]:
    if viewer is None or not posts:
        return {}
    votes = await reader.votes.find_by_user_and_posts(
        viewer, [post.id for post in posts]
    )
    return {vote.post_id: vote.direction for vote in votes}


def _touches_post(changes: Iterable[RecordChange], post_id: PostId) -> bool:
    target = str(post_id)
    # post_id None: the listener lost track of what changed
    return any(change.post_id in (None, target) for change in changes)
