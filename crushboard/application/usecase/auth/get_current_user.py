"""Get current user use case."""

from uuid import UUID

from pydantic import BaseModel

from crushboard.application.usecase.profile.common import ProfileItem
from crushboard.domain.service import JWTService, UserProfileService
from crushboard.domain.value import UserId


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # JWT token


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    profile: ProfileItem


class GetCurrentUserUseCase:
    """Use case for getting current authenticated user."""

    def __init__(
        self, jwt_service: JWTService, user_profile_service: UserProfileService
    ) -> None:
        """Initialize get current user use case.

        Args:
            jwt_service: JWT token domain service
            user_profile_service: User profile domain service
        """
        self.jwt_service = jwt_service
        self.user_profile_service = user_profile_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Execute get current user flow.

        Steps:
        1. Verify JWT token via JWT service
        2. Load the profile, creating the default one if it is missing

        Raises:
            JWTError: If token is invalid or expired
        """
        payload = self.jwt_service.verify_token(request.token)

        profile = await self.user_profile_service.get_or_create_profile(
            UserId(UUID(payload.user_id))
        )
        return GetCurrentUserResponse(profile=ProfileItem.from_profile(profile))
