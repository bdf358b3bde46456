"""Reply entity.

Replies are flat, immutable answers to a post.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from crushboard.domain.model.common import DomainModel
from crushboard.domain.value import DEFAULT_ALIAS, PostId, ReplyId, UserId


class Reply(DomainModel):
    """Reply entity. created_at is assigned by the store."""

    id: ReplyId
    post_id: PostId
    user_id: UserId
    text: str = Field(min_length=1, max_length=2000)
    alias: str = Field(default=DEFAULT_ALIAS, min_length=1, max_length=100)
    created_at: Optional[datetime] = None
