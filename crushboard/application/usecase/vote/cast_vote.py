"""Cast vote use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from crushboard.application.usecase.base import BaseUseCase, optional_user_id
from crushboard.domain.service import PostService, UserProfileService, VoteService
from crushboard.domain.value import PostId, VoteDirection


class CastVoteRequest(BaseModel):
    """Cast vote request."""

    post_id: str  # UUID string
    direction: VoteDirection
    user_id: str | None = None  # User ID from authenticated user


class CastVoteResponse(BaseModel):
    """Cast vote response.

    ``direction`` is the caller's vote after the click; None means the
    vote was toggled off.
    """

    post_id: str
    direction: Optional[VoteDirection]
    upvotes: int
    downvotes: int
    score: int


class CastVoteUseCase(BaseUseCase):
    """Use case for casting, switching or toggling off a vote."""

    def __init__(
        self,
        vote_service: VoteService,
        post_service: PostService,
        user_profile_service: UserProfileService,
    ) -> None:
        """Initialize cast vote use case.

        Args:
            vote_service: Vote domain service
            post_service: Post domain service
            user_profile_service: User profile domain service
        """
        self.vote_service = vote_service
        self.post_service = post_service
        self.user_profile_service = user_profile_service

    async def execute(self, request: CastVoteRequest) -> CastVoteResponse:
        """Execute cast vote flow.

        Args:
            request: Cast vote request

        Returns:
            Resulting vote state and the post's counters

        Raises:
            NotAuthenticatedError: If not signed in
            NotVerifiedError: If the caller is not verified
            NotFoundError: If the post does not exist
            VoteConflictError: If the vote could not be applied
        """
        profile = await self.user_profile_service.require_verified(
            optional_user_id(request.user_id), "vote"
        )

        post_id = PostId(UUID(request.post_id))
        direction = await self.vote_service.cast_vote(
            profile.id, post_id, request.direction
        )

        # Counters as of now, including concurrent voters
        post = await self.post_service.get_post(post_id)
        return CastVoteResponse(
            post_id=str(post.id),
            direction=direction,
            upvotes=post.upvotes,
            downvotes=post.downvotes,
            score=post.score,
        )
