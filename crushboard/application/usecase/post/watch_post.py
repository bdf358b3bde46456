"""Live post detail use case."""

from contextlib import asynccontextmanager
from typing import AsyncIterator
from uuid import UUID

from pydantic import BaseModel

from crushboard.application.usecase.base import optional_user_id
from crushboard.application.usecase.post.common import PostItem
from crushboard.application.usecase.post.get_post import GetPostRequest
from crushboard.application.usecase.reply.common import ReplyItem
from crushboard.domain.service import FeedService, PostDetailSnapshot
from crushboard.domain.value import PostId


class PostDetailResponse(BaseModel):
    """A post with its replies, oldest reply first.

    ``post`` is None once the post cannot be found.
    """

    post: PostItem | None
    replies: list[ReplyItem]


class WatchPostUseCase:
    """Use case for following a single post and its replies."""

    def __init__(self, feed_service: FeedService) -> None:
        """Initialize watch post use case.

        Args:
            feed_service: Feed domain service
        """
        self.feed_service = feed_service

    @asynccontextmanager
    async def subscribe(
        self, request: GetPostRequest
    ) -> AsyncIterator[AsyncIterator[PostDetailResponse]]:
        """Open a live post detail view.

        Args:
            request: Post ID and caller

        Yields:
            Async iterator of post detail snapshots, the current one first
        """
        post_id = PostId(UUID(request.post_id))
        async with self.feed_service.watch_post(
            post_id, viewer=optional_user_id(request.user_id)
        ) as snapshots:
            yield self._responses(snapshots)

    async def _responses(
        self, snapshots: AsyncIterator[PostDetailSnapshot]
    ) -> AsyncIterator[PostDetailResponse]:
        async for snapshot in snapshots:
            post = None
            if snapshot.post:
                post = PostItem.from_post(snapshot.post, snapshot.my_vote)
            yield PostDetailResponse(
                post=post,
                replies=[ReplyItem.from_reply(reply) for reply in snapshot.replies],
            )
