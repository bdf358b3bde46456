"""Domain value objects for CrushBoard."""

from crushboard.domain.value.identifiers import PostId, ReplyId, UserId
from crushboard.domain.value.types import (
    DEFAULT_ALIAS,
    TAG_MARKER,
    Collection,
    OptionalTag,
    PostFilter,
    PrimaryTag,
    RecordChange,
    SortMode,
    VerificationStatus,
    VoteDelta,
    VoteDirection,
    normalize_alias,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "ReplyId",
    # Types
    "DEFAULT_ALIAS",
    "TAG_MARKER",
    "Collection",
    "OptionalTag",
    "PostFilter",
    "PrimaryTag",
    "RecordChange",
    "SortMode",
    "VerificationStatus",
    "VoteDelta",
    "VoteDirection",
    "normalize_alias",
]
