"""Anonymous sign-in use case."""

from uuid import uuid4

import logfire
from pydantic import BaseModel

from crushboard.application.usecase.profile.common import ProfileItem
from crushboard.domain.service import JWTService, UserProfileService
from crushboard.domain.value import UserId


class SignInAnonymouslyRequest(BaseModel):
    """Anonymous sign-in request. Carries nothing: the user is new."""


class SignInAnonymouslyResponse(BaseModel):
    """Anonymous sign-in response."""

    token: str  # JWT token
    profile: ProfileItem


class SignInAnonymouslyUseCase:
    """Use case for starting an anonymous session."""

    def __init__(
        self, jwt_service: JWTService, user_profile_service: UserProfileService
    ) -> None:
        """Initialize anonymous sign-in use case.

        Args:
            jwt_service: JWT token domain service
            user_profile_service: User profile domain service
        """
        self.jwt_service = jwt_service
        self.user_profile_service = user_profile_service

    async def execute(
        self, request: SignInAnonymouslyRequest
    ) -> SignInAnonymouslyResponse:
        """Execute anonymous sign-in flow.

        Steps:
        1. Generate a fresh user ID
        2. Bootstrap the default, unverified profile
        3. Issue a JWT for the new user
        """
        user_id = UserId(uuid4())

        with logfire.span("sign_in_anonymously.execute", user_id=str(user_id)):
            profile = await self.user_profile_service.get_or_create_profile(user_id)
            token = self.jwt_service.create_token(str(user_id))

            return SignInAnonymouslyResponse(
                token=token, profile=ProfileItem.from_profile(profile)
            )
