"""Vote entity.

One record per (user, post) pair. Absence of a record means the user has
not voted on the post.
"""

from crushboard.domain.model.common import DomainModel
from crushboard.domain.value import PostId, UserId, VoteDirection


class Vote(DomainModel):
    """Vote ledger record, keyed by (user_id, post_id)."""

    user_id: UserId
    post_id: PostId
    direction: VoteDirection
