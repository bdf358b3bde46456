"""Get vote use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from crushboard.domain.service import VoteService
from crushboard.domain.value import PostId, UserId, VoteDirection


class GetVoteRequest(BaseModel):
    """Get vote request."""

    post_id: str  # UUID string
    user_id: str  # User ID from authenticated user


class GetVoteResponse(BaseModel):
    """Get vote response."""

    post_id: str
    direction: Optional[VoteDirection]


class GetVoteUseCase:
    """Use case for reading the caller's vote on a post."""

    def __init__(self, vote_service: VoteService) -> None:
        """Initialize get vote use case.

        Args:
            vote_service: Vote domain service
        """
        self.vote_service = vote_service

    async def execute(self, request: GetVoteRequest) -> GetVoteResponse:
        """Execute get vote flow."""
        direction = await self.vote_service.get_vote_direction(
            UserId(UUID(request.user_id)), PostId(UUID(request.post_id))
        )
        return GetVoteResponse(post_id=request.post_id, direction=direction)
