"""Live post feed use case."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from crushboard.application.usecase.base import optional_user_id
from crushboard.application.usecase.post.common import PostItem
from crushboard.application.usecase.post.list_posts import (
    ListPostsRequest,
    ListPostsResponse,
)
from crushboard.domain.service import FeedService, FeedSnapshot


class WatchPostsUseCase:
    """Use case for following the post feed as it changes."""

    def __init__(self, feed_service: FeedService) -> None:
        """Initialize watch posts use case.

        Args:
            feed_service: Feed domain service
        """
        self.feed_service = feed_service

    @asynccontextmanager
    async def subscribe(
        self, request: ListPostsRequest
    ) -> AsyncIterator[AsyncIterator[ListPostsResponse]]:
        """Open a live feed.

        Args:
            request: Sort mode, tag filter and caller

        Yields:
            Async iterator of feed snapshots, the current one first
        """
        async with self.feed_service.watch_posts(
            request.to_filter(), viewer=optional_user_id(request.user_id)
        ) as snapshots:
            yield self._responses(snapshots, request)

    async def _responses(
        self, snapshots: AsyncIterator[FeedSnapshot], request: ListPostsRequest
    ) -> AsyncIterator[ListPostsResponse]:
        async for snapshot in snapshots:
            items = [
                PostItem.from_post(post, snapshot.my_votes.get(post.id))
                for post in snapshot.posts
            ]
            yield ListPostsResponse(posts=items, sort=request.sort, tag=request.tag)
