"""Reply use cases."""

from .add_reply import AddReplyRequest, AddReplyResponse, AddReplyUseCase
from .common import ReplyItem
from .list_replies import ListRepliesRequest, ListRepliesResponse, ListRepliesUseCase

__all__ = [
    "AddReplyRequest",
    "AddReplyResponse",
    "AddReplyUseCase",
    "ListRepliesRequest",
    "ListRepliesResponse",
    "ListRepliesUseCase",
    "ReplyItem",
]
