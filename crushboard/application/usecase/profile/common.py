"""Profile representation shared by the profile and auth use cases."""

from pydantic import BaseModel

from crushboard.domain.model import UserProfile
from crushboard.domain.value import VerificationStatus


class ProfileItem(BaseModel):
    """User profile as returned to its owner."""

    user_id: str
    alias: str
    college: str
    crush_points: int
    verification_status: VerificationStatus
    is_verified: bool

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "ProfileItem":
        """Build the owner's view of a profile."""
        return cls(
            user_id=str(profile.id),
            alias=profile.alias,
            college=profile.college,
            crush_points=profile.crush_points,
            verification_status=profile.verification_status,
            is_verified=profile.is_verified,
        )
