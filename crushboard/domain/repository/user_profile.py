"""User profile repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from crushboard.domain.model.user_profile import UserProfile
from crushboard.domain.value import UserId


class UserProfileRepository(ABC):
    """Repository for UserProfile aggregate."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[UserProfile]:
        """Find a profile by user ID.

        Args:
            user_id: The user's ID

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, profile: UserProfile) -> UserProfile:
        """Save a profile (create or update).

        Args:
            profile: The profile to save

        Returns:
            The saved profile
        """
        pass
