"""Reset verification use case."""

from uuid import UUID

from pydantic import BaseModel

from crushboard.application.usecase.profile.common import ProfileItem
from crushboard.domain.service import UserProfileService
from crushboard.domain.value import UserId


class ResetVerificationRequest(BaseModel):
    """Reset verification request."""

    user_id: str  # User ID from authenticated user


class ResetVerificationResponse(BaseModel):
    """Reset verification response."""

    profile: ProfileItem


class ResetVerificationUseCase:
    """Use case for trying again after a rejected verification."""

    def __init__(self, user_profile_service: UserProfileService) -> None:
        """Initialize reset verification use case.

        Args:
            user_profile_service: User profile domain service
        """
        self.user_profile_service = user_profile_service

    async def execute(
        self, request: ResetVerificationRequest
    ) -> ResetVerificationResponse:
        """Execute reset verification flow.

        Raises:
            NotFoundError: If the profile does not exist
            InvalidStateTransitionError: If the profile is not rejected
        """
        profile = await self.user_profile_service.reset_verification(
            UserId(UUID(request.user_id))
        )
        return ResetVerificationResponse(profile=ProfileItem.from_profile(profile))
