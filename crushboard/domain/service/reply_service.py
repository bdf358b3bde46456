"""Reply domain service.

Creating a reply and bumping the post's reply counter happen in one batch.
"""

from uuid import uuid4

import logfire

from crushboard.domain.error import NotFoundError, ValidationError
from crushboard.domain.model.reply import Reply
from crushboard.domain.repository import RecordStore, ReplyRepository
from crushboard.domain.value import PostId, ReplyId, UserId, normalize_alias

from .base import Service
from .post_service import PostService


class ReplyService(Service):
    """Domain service for reply operations."""

    span_prefix = "reply_service"

    def __init__(
        self,
        reply_repository: ReplyRepository,
        record_store: RecordStore,
        post_service: PostService,
    ) -> None:
        """Initialize reply service.

        Args:
            reply_repository: Reply repository
            record_store: Store used to commit reply batches
            post_service: Post domain service
        """
        self.reply_repository = reply_repository
        self.record_store = record_store
        self.post_service = post_service

    async def add_reply(
        self,
        post_id: PostId,
        user_id: UserId,
        text: str,
        alias: str | None = None,
    ) -> Reply:
        """Reply to a post.

        Args:
            post_id: Post replied to
            user_id: Replying user
            text: Reply text (trimmed, must not be empty)
            alias: Display alias (defaults to "Anonymous")

        Returns:
            The stored reply

        Raises:
            ValidationError: If the text is empty
            NotFoundError: If the post does not exist
        """
        body = (text or "").strip()
        if not body:
            raise ValidationError("Reply cannot be empty")

        with self.span("add_reply", post_id=str(post_id), user_id=str(user_id)):
            post = await self.post_service.get_post_by_id(post_id)
            if not post:
                logfire.warn("Reply to non-existent post", post_id=str(post_id))
                raise NotFoundError("Post", str(post_id))

            reply = Reply(
                id=ReplyId(uuid4()),
                post_id=post_id,
                user_id=user_id,
                text=body,
                alias=normalize_alias(alias),
            )

            batch = self.record_store.batch()
            batch.create_reply(reply)
            batch.increment_post(post_id, reply_count=1)
            await batch.commit()

            saved = await self.reply_repository.find_by_id(reply.id)
            if saved is None:
                raise NotFoundError("Reply", str(reply.id))

            logfire.info(
                "Reply created",
                reply_id=str(saved.id),
                post_id=str(post_id),
            )
            return saved

    async def get_replies_for_post(self, post_id: PostId) -> list[Reply]:
        """Get all replies to a post, oldest first.

        Args:
            post_id: Post ID

        Returns:
            Replies in creation order
        """
        with self.span("get_replies_for_post", post_id=str(post_id)):
            replies = await self.reply_repository.find_by_post(post_id)
            logfire.info(
                "Replies retrieved for post", post_id=str(post_id), count=len(replies)
            )
            return replies
