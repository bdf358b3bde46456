"""In-memory repository implementations for testing."""

from .batch import InMemoryRecordStore, InMemoryWriteBatch
from .post import InMemoryPostRepository
from .reply import InMemoryReplyRepository
from .store import InMemoryStore
from .user_profile import InMemoryUserProfileRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryPostRepository",
    "InMemoryRecordStore",
    "InMemoryReplyRepository",
    "InMemoryStore",
    "InMemoryUserProfileRepository",
    "InMemoryVoteRepository",
    "InMemoryWriteBatch",
]
