"""Repository interfaces for the CrushBoard domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from crushboard.domain.repository.batch import RecordStore, WriteBatch
from crushboard.domain.repository.change_feed import ChangeFeed, ChangeListener
from crushboard.domain.repository.post import PostRepository
from crushboard.domain.repository.reader import RecordReader
from crushboard.domain.repository.reply import ReplyRepository
from crushboard.domain.repository.user_profile import UserProfileRepository
from crushboard.domain.repository.vote import VoteRepository

__all__ = [
    "ChangeFeed",
    "ChangeListener",
    "PostRepository",
    "RecordReader",
    "RecordStore",
    "ReplyRepository",
    "UserProfileRepository",
    "VoteRepository",
    "WriteBatch",
]
