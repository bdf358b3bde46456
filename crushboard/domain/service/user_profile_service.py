"""User profile domain service.

Owns profile bootstrap and the user-driven half of identity verification
(submitting an ID, trying again after a rejection). Approving or rejecting
a submission happens outside this service.
"""

import logfire

from crushboard.domain.error import (
    InvalidStateTransitionError,
    NotAuthenticatedError,
    NotFoundError,
    NotVerifiedError,
    ValidationError,
)
from crushboard.domain.model.user_profile import UserProfile
from crushboard.domain.repository import UserProfileRepository
from crushboard.domain.value import UserId, VerificationStatus

from .base import Service


class UserProfileService(Service):
    """Domain service for user profiles."""

    span_prefix = "user_profile_service"

    def __init__(self, user_profile_repository: UserProfileRepository) -> None:
        """Initialize user profile service.

        Args:
            user_profile_repository: User profile repository
        """
        self.user_profile_repository = user_profile_repository

    async def get_or_create_profile(self, user_id: UserId) -> UserProfile:
        """Get a user's profile, creating the default one on first sight.

        Args:
            user_id: User ID

        Returns:
            Existing or newly created profile
        """
        with self.span("get_or_create_profile", user_id=str(user_id)):
            profile = await self.user_profile_repository.find_by_id(user_id)
            if profile:
                return profile

            profile = await self.user_profile_repository.save(UserProfile(id=user_id))
            logfire.info("User profile created", user_id=str(user_id))
            return profile

    async def get_profile(self, user_id: UserId) -> UserProfile:
        """Get a user's profile.

        Raises:
            NotFoundError: If the profile does not exist
        """
        profile = await self.user_profile_repository.find_by_id(user_id)
        if not profile:
            logfire.warn("User profile not found", user_id=str(user_id))
            raise NotFoundError("UserProfile", str(user_id))
        return profile

    async def require_verified(self, user_id: UserId | None, action: str) -> UserProfile:
        """Gate a mutation on the caller being signed in and verified.

        Args:
            user_id: Caller (None when not signed in)
            action: Short description used in the error message

        Returns:
            The caller's verified profile

        Raises:
            NotAuthenticatedError: If there is no caller
            NotVerifiedError: If the caller is not verified
        """
        if user_id is None:
            raise NotAuthenticatedError(action)

        profile = await self.user_profile_repository.find_by_id(user_id)
        if profile is None or not profile.is_verified:
            status = (
                profile.verification_status if profile else VerificationStatus.UNVERIFIED
            )
            logfire.warn(
                "Unverified user attempted gated action",
                user_id=str(user_id),
                action=action,
                verification_status=status.value,
            )
            raise NotVerifiedError(str(user_id), status.value)
        return profile

    async def submit_verification(
        self, user_id: UserId, id_card_url: str
    ) -> UserProfile:
        """Record an uploaded ID document and mark the profile pending.

        Args:
            user_id: User ID
            id_card_url: Reference to the uploaded document

        Returns:
            Updated profile

        Raises:
            ValidationError: If no document reference is given
            InvalidStateTransitionError: If the profile is not unverified
        """
        if not id_card_url or not id_card_url.strip():
            raise ValidationError("Please select your College ID photo.")

        with self.span("submit_verification", user_id=str(user_id)):
            profile = await self.get_or_create_profile(user_id)
            self._check_transition(profile, VerificationStatus.PENDING)

            updated = await self.user_profile_repository.save(
                profile.evolve(
                    id_card_url=id_card_url.strip(),
                    verification_status=VerificationStatus.PENDING,
                )
            )
            logfire.info("Verification submitted", user_id=str(user_id))
            return updated

    async def reset_verification(self, user_id: UserId) -> UserProfile:
        """Let a rejected user start over.

        Raises:
            InvalidStateTransitionError: If the profile is not rejected
        """
        with self.span("reset_verification", user_id=str(user_id)):
            profile = await self.get_profile(user_id)
            self._check_transition(profile, VerificationStatus.UNVERIFIED)

            updated = await self.user_profile_repository.save(
                profile.evolve(verification_status=VerificationStatus.UNVERIFIED)
            )
            logfire.info("Verification reset", user_id=str(user_id))
            return updated

    @staticmethod
    def _check_transition(profile: UserProfile, target: VerificationStatus) -> None:
        allowed = {
            VerificationStatus.PENDING: VerificationStatus.UNVERIFIED,
            VerificationStatus.UNVERIFIED: VerificationStatus.REJECTED,
        }
        if allowed.get(target) != profile.verification_status:
            raise InvalidStateTransitionError(
                profile.verification_status.value, target.value
            )
