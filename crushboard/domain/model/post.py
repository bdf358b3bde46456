"""Post aggregate root.

Posts are anonymous confessions carrying one primary tag and any number of
free-form tags. Their vote and reply counters are denormalized aggregates
maintained by the vote and reply services.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from crushboard.domain.model.common import DomainModel
from crushboard.domain.value import DEFAULT_ALIAS, OptionalTag, PostId, PrimaryTag, UserId


class Post(DomainModel):
    """Post aggregate root.

    Invariants:
    - score == upvotes - downvotes
    - counters are never negative
    - created_at is assigned by the store when the post is written
    """

    id: PostId
    message: str = Field(min_length=1, max_length=5000)
    primary_tag: PrimaryTag
    optional_tags: list[OptionalTag] = Field(default_factory=list)
    alias: str = Field(default=DEFAULT_ALIAS, min_length=1, max_length=100)
    user_id: UserId
    upvotes: int = Field(default=0, ge=0)
    downvotes: int = Field(default=0, ge=0)
    score: int = 0
    reply_count: int = Field(default=0, ge=0)
    created_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_score(self) -> "Post":
        """Validate that the score matches the vote counters."""
        if self.score != self.upvotes - self.downvotes:
            raise ValueError(
                f"Score {self.score} does not match upvotes {self.upvotes} "
                f"minus downvotes {self.downvotes}"
            )
        return self
