"""List posts use case."""

import logfire
from pydantic import BaseModel, Field

from crushboard.application.usecase.base import optional_user_id
from crushboard.application.usecase.post.common import PostItem
from crushboard.domain.model import Post
from crushboard.domain.service import PostService, VoteService
from crushboard.domain.value import PostFilter, PrimaryTag, SortMode, UserId


class ListPostsRequest(BaseModel):
    """List posts request."""

    sort: SortMode = SortMode.NEW
    tag: PrimaryTag | None = None  # Filter by primary tag
    limit: int = Field(default=50, ge=1, le=500)
    user_id: str | None = None  # Current user ID (if authenticated)

    def to_filter(self) -> PostFilter:
        """Feed query for this request."""
        return PostFilter(sort=self.sort, tag=self.tag, limit=self.limit)


class ListPostsResponse(BaseModel):
    """List posts response."""

    posts: list[PostItem]
    sort: SortMode
    tag: PrimaryTag | None


async def build_post_items(
    vote_service: VoteService, posts: list[Post], user_id: UserId | None
) -> list[PostItem]:
    """Attach the caller's vote to each post.

    Uses a single batch query for the caller's votes.
    """
    my_votes = {}
    if user_id and posts:
        my_votes = await vote_service.get_user_votes_for_posts(
            user_id, [post.id for post in posts]
        )
    return [PostItem.from_post(post, my_votes.get(post.id)) for post in posts]


class ListPostsUseCase:
    """Use case for listing the post feed."""

    def __init__(self, post_service: PostService, vote_service: VoteService) -> None:
        """Initialize list posts use case.

        Args:
            post_service: Post domain service
            vote_service: Vote domain service
        """
        self.post_service = post_service
        self.vote_service = vote_service

    async def execute(self, request: ListPostsRequest) -> ListPostsResponse:
        """Execute list posts flow.

        Args:
            request: List posts request with sort mode and tag filter

        Returns:
            Posts in feed order
        """
        with logfire.span(
            "list_posts.execute",
            sort=request.sort.value,
            tag=request.tag.value if request.tag else None,
            limit=request.limit,
        ):
            posts = await self.post_service.list_posts(request.to_filter())
            items = await build_post_items(
                self.vote_service, posts, optional_user_id(request.user_id)
            )
            return ListPostsResponse(posts=items, sort=request.sort, tag=request.tag)
