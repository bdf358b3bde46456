"""Vote repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from crushboard.domain.model.vote import Vote
from crushboard.domain.value import PostId, UserId


class VoteRepository(ABC):
    """Read access to the Vote Ledger.

    Ledger writes only happen inside a WriteBatch together with the
    matching counter increments.
    """

    @abstractmethod
    async def find_by_user_and_post(
        self, user_id: UserId, post_id: PostId
    ) -> Optional[Vote]:
        """Find a user's vote on a post.

        Args:
            user_id: The user's ID
            post_id: The post's ID

        Returns:
            The vote if one exists, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_posts(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> List[Vote]:
        """Find a user's votes on several posts (batch query).

        Args:
            user_id: The user's ID
            post_ids: Posts to check

        Returns:
            Votes by the user on the given posts
        """
        pass
