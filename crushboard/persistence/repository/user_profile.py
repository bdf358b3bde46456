"""PostgreSQL implementation of UserProfile repository."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from crushboard.domain.model import UserProfile
from crushboard.domain.repository import UserProfileRepository
from crushboard.domain.value import UserId
from crushboard.persistence.mappers import row_to_user_profile, user_profile_to_dict
from crushboard.persistence.tables import user_profiles_table


class PostgresUserProfileRepository(UserProfileRepository):
    """PostgreSQL implementation of UserProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[UserProfile]:
        """Find a profile by user ID."""
        stmt = select(user_profiles_table).where(user_profiles_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_user_profile(row._asdict()) if row else None

    async def save(self, profile: UserProfile) -> UserProfile:
        """Save a profile (create or update).

        Args:
            profile: Profile to save

        Returns:
            Saved profile
        """
        profile_dict = user_profile_to_dict(profile)
        updates = {key: value for key, value in profile_dict.items() if key != "id"}

        stmt = (
            insert(user_profiles_table)
            .values(**profile_dict)
            .on_conflict_do_update(
                index_elements=[user_profiles_table.c.id],
                set_={**updates, "updated_at": func.now()},
            )
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return profile
