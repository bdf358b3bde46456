"""Get post use case."""

from uuid import UUID

from pydantic import BaseModel

from crushboard.application.usecase.base import optional_user_id
from crushboard.application.usecase.post.common import PostItem
from crushboard.domain.service import PostService, VoteService
from crushboard.domain.value import PostId


class GetPostRequest(BaseModel):
    """Get post request."""

    post_id: str  # UUID string
    user_id: str | None = None  # Current user ID (if authenticated)


class GetPostResponse(BaseModel):
    """Get post response."""

    post: PostItem


class GetPostUseCase:
    """Use case for retrieving a post by ID."""

    def __init__(self, post_service: PostService, vote_service: VoteService) -> None:
        """Initialize get post use case.

        Args:
            post_service: Post domain service
            vote_service: Vote domain service
        """
        self.post_service = post_service
        self.vote_service = vote_service

    async def execute(self, request: GetPostRequest) -> GetPostResponse:
        """Execute get post flow.

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self.post_service.get_post(PostId(UUID(request.post_id)))

        my_vote = None
        user_id = optional_user_id(request.user_id)
        if user_id:
            my_vote = await self.vote_service.get_vote_direction(user_id, post.id)

        return GetPostResponse(post=PostItem.from_post(post, my_vote))
