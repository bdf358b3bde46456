"""Add reply use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from crushboard.application.usecase.base import BaseUseCase, optional_user_id
from crushboard.application.usecase.reply.common import ReplyItem
from crushboard.domain.service import ReplyService, UserProfileService
from crushboard.domain.value import PostId


class AddReplyRequest(BaseModel):
    """Add reply request."""

    post_id: str  # UUID string
    text: str
    alias: str | None = None
    user_id: str | None = None  # User ID from authenticated user


class AddReplyResponse(BaseModel):
    """Add reply response."""

    reply: ReplyItem


class AddReplyUseCase(BaseUseCase):
    """Use case for replying to a post."""

    def __init__(
        self, reply_service: ReplyService, user_profile_service: UserProfileService
    ) -> None:
        """Initialize add reply use case.

        Args:
            reply_service: Reply domain service
            user_profile_service: User profile domain service
        """
        self.reply_service = reply_service
        self.user_profile_service = user_profile_service

    async def execute(self, request: AddReplyRequest) -> AddReplyResponse:
        """Execute add reply flow.

        Raises:
            NotAuthenticatedError: If not signed in
            NotVerifiedError: If the caller is not verified
            ValidationError: If the text is empty
            NotFoundError: If the post does not exist
        """
        profile = await self.user_profile_service.require_verified(
            optional_user_id(request.user_id), "reply"
        )

        with logfire.span("add_reply.execute", post_id=request.post_id):
            reply = await self.reply_service.add_reply(
                post_id=PostId(UUID(request.post_id)),
                user_id=profile.id,
                text=request.text,
                alias=request.alias,
            )
            return AddReplyResponse(reply=ReplyItem.from_reply(reply))
