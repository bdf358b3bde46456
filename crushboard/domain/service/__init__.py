"""Domain services."""

from .base import Service
from .feed_service import FeedService, FeedSnapshot, PostDetailSnapshot
from .jwt_service import JWTService
from .post_service import PostService, parse_optional_tags
from .reply_service import ReplyService
from .user_profile_service import UserProfileService
from .vote_service import VoteService, compute_vote_delta

__all__ = [
    "FeedService",
    "FeedSnapshot",
    "JWTService",
    "PostDetailSnapshot",
    "PostService",
    "ReplyService",
    "Service",
    "UserProfileService",
    "VoteService",
    "compute_vote_delta",
    "parse_optional_tags",
]
