"""Domain value objects for CrushBoard.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from crushboard.domain.value.common import RootValueObject, ValueObject

TAG_MARKER = "#"
DEFAULT_ALIAS = "Anonymous"


class VoteDirection(str, Enum):
    """Direction of a vote on a post."""

    UP = "up"
    DOWN = "down"

    @property
    def opposite(self) -> "VoteDirection":
        """The other direction."""
        return VoteDirection.DOWN if self is VoteDirection.UP else VoteDirection.UP


class PrimaryTag(str, Enum):
    """Fixed set of primary tags. Every post carries exactly one."""

    CRUSH = "#Crush"
    ROAST = "#Roast"
    CONFESSION = "#Confession"
    DARE = "#Dare"
    QUESTION = "#Question"


class VerificationStatus(str, Enum):
    """Identity verification status of a user profile.

    unverified -> pending (ID submitted) -> verified | rejected
    rejected -> unverified (user tries again)
    """

    UNVERIFIED = "unverified"
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class SortMode(str, Enum):
    """Feed ordering."""

    NEW = "new"  # created_at DESC
    HOT = "hot"  # score DESC


class Collection(str, Enum):
    """Record collections that publish change notifications."""

    POSTS = "posts"
    VOTES = "votes"
    REPLIES = "replies"


class OptionalTag(RootValueObject[str]):
    """Free-form tag attached to a post, e.g. '#HostelLife'."""

    @field_validator("root")
    @classmethod
    def validate_tag(cls, v: str) -> str:
        """Validate tag is non-empty and starts with the marker."""
        if not v.startswith(TAG_MARKER) or len(v) < 2:
            raise ValueError(f"Tag must start with '{TAG_MARKER}' and not be empty")
        return v


class VoteDelta(ValueObject):
    """Signed counter changes produced by a single vote action.

    The resulting vote state is ``new_direction``; ``None`` means the
    ledger record is removed.
    """

    upvotes: int = 0
    downvotes: int = 0
    new_direction: Optional[VoteDirection] = None

    @property
    def score(self) -> int:
        """Score change implied by the counter changes."""
        return self.upvotes - self.downvotes


class RecordChange(ValueObject):
    """Notification that a record in a collection was written."""

    collection: Collection
    record_id: str
    # Post the change belongs to (the post itself, or the parent of a reply)
    post_id: Optional[str] = None


class PostFilter(ValueObject):
    """Query parameters of a post feed."""

    sort: SortMode = SortMode.NEW
    tag: Optional[PrimaryTag] = None
    limit: int = Field(default=50, ge=1, le=500)


def normalize_alias(alias: Optional[str]) -> str:
    """Trim an alias, falling back to DEFAULT_ALIAS when blank."""
    trimmed = (alias or "").strip()
    return trimmed or DEFAULT_ALIAS
