"""User profile aggregate.

Profiles are created on first sign-in. Only verified users may post,
vote or reply.
"""

from pydantic import Field

from crushboard.domain.model.common import DomainModel
from crushboard.domain.value import UserId, VerificationStatus

DEFAULT_PROFILE_ALIAS = "Newbie"
DEFAULT_COLLEGE = "Unknown University"


class UserProfile(DomainModel):
    """User profile, keyed by the anonymous user id."""

    id: UserId
    alias: str = DEFAULT_PROFILE_ALIAS
    college: str = DEFAULT_COLLEGE
    crush_points: int = Field(default=0, ge=0)
    verification_status: VerificationStatus = VerificationStatus.UNVERIFIED
    id_card_url: str = ""

    @property
    def is_verified(self) -> bool:
        """Whether gated actions are allowed."""
        return self.verification_status == VerificationStatus.VERIFIED
