"""List replies use case."""

from uuid import UUID

from pydantic import BaseModel

from crushboard.application.usecase.reply.common import ReplyItem
from crushboard.domain.service import PostService, ReplyService
from crushboard.domain.value import PostId


class ListRepliesRequest(BaseModel):
    """List replies request."""

    post_id: str  # UUID string


class ListRepliesResponse(BaseModel):
    """List replies response, oldest first."""

    replies: list[ReplyItem]
    total: int


class ListRepliesUseCase:
    """Use case for reading the replies of a post."""

    def __init__(self, reply_service: ReplyService, post_service: PostService) -> None:
        """Initialize list replies use case.

        Args:
            reply_service: Reply domain service
            post_service: Post domain service
        """
        self.reply_service = reply_service
        self.post_service = post_service

    async def execute(self, request: ListRepliesRequest) -> ListRepliesResponse:
        """Execute list replies flow.

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self.post_service.get_post(PostId(UUID(request.post_id)))
        replies = await self.reply_service.get_replies_for_post(post.id)
        return ListRepliesResponse(
            replies=[ReplyItem.from_reply(reply) for reply in replies],
            total=len(replies),
        )
