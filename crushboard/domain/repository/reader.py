"""Read access for long-running queries.

Live queries wait between snapshots for as long as a client stays
connected. They read through a RecordReader that is opened for one
snapshot and released right after, so no connection is held while they
wait.
"""

from dataclasses import dataclass

from crushboard.domain.repository.post import PostRepository
from crushboard.domain.repository.reply import ReplyRepository
from crushboard.domain.repository.vote import VoteRepository


@dataclass(frozen=True)
class RecordReader:
    """Repositories sharing one short-lived read session."""

    posts: PostRepository
    votes: VoteRepository
    replies: ReplyRepository
