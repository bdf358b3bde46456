"""Shared state of the in-memory record store."""

import asyncio
from datetime import datetime, timedelta, timezone

from crushboard.domain.model import Post, Reply, UserProfile, Vote
from crushboard.domain.value import PostId, ReplyId, UserId


class InMemoryStore:
    """Collections shared by the in-memory repositories and batches.

    Batches commit under ``lock``. Timestamps come from ``now()``, which
    never returns the same value twice, so creation order is total.
    """

    def __init__(self) -> None:
        self.posts: dict[PostId, Post] = {}
        self.votes: dict[tuple[UserId, PostId], Vote] = {}
        self.replies: dict[ReplyId, Reply] = {}
        self.profiles: dict[UserId, UserProfile] = {}
        self.lock = asyncio.Lock()
        self._last_timestamp: datetime | None = None

    def now(self) -> datetime:
        """Current UTC time, strictly increasing across calls."""
        current = datetime.now(timezone.utc)
        if self._last_timestamp and current <= self._last_timestamp:
            current = self._last_timestamp + timedelta(microseconds=1)
        self._last_timestamp = current
        return current
