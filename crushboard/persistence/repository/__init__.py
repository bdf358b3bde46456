"""PostgreSQL repository implementations."""

from crushboard.persistence.repository.batch import (
    PostgresRecordStore,
    PostgresWriteBatch,
)
from crushboard.persistence.repository.post import PostgresPostRepository
from crushboard.persistence.repository.reply import PostgresReplyRepository
from crushboard.persistence.repository.user_profile import (
    PostgresUserProfileRepository,
)
from crushboard.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresPostRepository",
    "PostgresRecordStore",
    "PostgresReplyRepository",
    "PostgresUserProfileRepository",
    "PostgresVoteRepository",
    "PostgresWriteBatch",
]
