"""Post representation shared by the post use cases."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from crushboard.domain.model import Post
from crushboard.domain.value import PrimaryTag, VoteDirection


class PostItem(BaseModel):
    """Post as returned to clients."""

    post_id: str
    message: str
    primary_tag: PrimaryTag
    optional_tags: list[str]
    alias: str
    upvotes: int
    downvotes: int
    score: int
    reply_count: int
    created_at: datetime | None
    my_vote: Optional[VoteDirection] = None  # Caller's vote, if signed in

    @classmethod
    def from_post(
        cls, post: Post, my_vote: Optional[VoteDirection] = None
    ) -> "PostItem":
        """Build the client view of a post.

        The author's user ID is never exposed.
        """
        return cls(
            post_id=str(post.id),
            message=post.message,
            primary_tag=post.primary_tag,
            optional_tags=[tag.root for tag in post.optional_tags],
            alias=post.alias,
            upvotes=post.upvotes,
            downvotes=post.downvotes,
            score=post.score,
            reply_count=post.reply_count,
            created_at=post.created_at,
            my_vote=my_vote,
        )
