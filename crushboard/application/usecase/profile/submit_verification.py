"""Submit verification use case."""

from uuid import UUID

from pydantic import BaseModel

from crushboard.application.usecase.profile.common import ProfileItem
from crushboard.domain.service import UserProfileService
from crushboard.domain.value import UserId


class SubmitVerificationRequest(BaseModel):
    """Submit verification request."""

    user_id: str  # User ID from authenticated user
    id_card_url: str  # Where the uploaded ID photo is stored


class SubmitVerificationResponse(BaseModel):
    """Submit verification response."""

    profile: ProfileItem


class SubmitVerificationUseCase:
    """Use case for submitting a college ID for review."""

    def __init__(self, user_profile_service: UserProfileService) -> None:
        """Initialize submit verification use case.

        Args:
            user_profile_service: User profile domain service
        """
        self.user_profile_service = user_profile_service

    async def execute(
        self, request: SubmitVerificationRequest
    ) -> SubmitVerificationResponse:
        """Execute submit verification flow.

        Raises:
            ValidationError: If no ID photo reference is given
            InvalidStateTransitionError: If the profile is not unverified
        """
        profile = await self.user_profile_service.submit_verification(
            UserId(UUID(request.user_id)), request.id_card_url
        )
        return SubmitVerificationResponse(profile=ProfileItem.from_profile(profile))
