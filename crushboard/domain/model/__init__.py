"""Domain models for CrushBoard."""

from crushboard.domain.model.common import DomainModel
from crushboard.domain.model.post import Post
from crushboard.domain.model.reply import Reply
from crushboard.domain.model.user_profile import UserProfile
from crushboard.domain.model.vote import Vote

__all__ = [
    "DomainModel",
    "Post",
    "Reply",
    "UserProfile",
    "Vote",
]
