"""In-memory user profile repository for testing."""

from typing import Optional

from crushboard.domain.model.user_profile import UserProfile
from crushboard.domain.repository.user_profile import UserProfileRepository
from crushboard.domain.value import UserId

from .store import InMemoryStore


class InMemoryUserProfileRepository(UserProfileRepository):
    """In-memory implementation of UserProfileRepository for testing."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def find_by_id(self, user_id: UserId) -> Optional[UserProfile]:
        """Find a profile by user ID."""
        return self._store.profiles.get(user_id)

    async def save(self, profile: UserProfile) -> UserProfile:
        """Save a profile (create or update)."""
        self._store.profiles[profile.id] = profile
        return profile
