"""Unit tests for anonymous sign-in and session lookup."""

import pytest

from crushboard.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    SignInAnonymouslyRequest,
    SignInAnonymouslyUseCase,
)
from crushboard.domain.service import JWTService
from crushboard.domain.value import VerificationStatus
from crushboard.util.jwt import JWTError
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestSignInAnonymously:
    """Tests for SignInAnonymouslyUseCase."""

    @pytest.mark.asyncio
    async def test_issues_token_for_new_unverified_user(self, unit_env):
        # Arrange
        sign_in = await unit_env.get(SignInAnonymouslyUseCase)
        jwt_service = await unit_env.get(JWTService)

        # Act
        response = await sign_in.execute(SignInAnonymouslyRequest())

        # Assert
        assert jwt_service.get_user_id_from_token(response.token) == (
            response.profile.user_id
        )
        assert response.profile.verification_status == VerificationStatus.UNVERIFIED
        assert response.profile.is_verified is False

    @pytest.mark.asyncio
    async def test_each_sign_in_is_a_new_user(self, unit_env):
        sign_in = await unit_env.get(SignInAnonymouslyUseCase)

        first = await sign_in.execute(SignInAnonymouslyRequest())
        second = await sign_in.execute(SignInAnonymouslyRequest())

        assert first.profile.user_id != second.profile.user_id


class TestGetCurrentUser:
    """Tests for GetCurrentUserUseCase."""

    @pytest.mark.asyncio
    async def test_returns_profile_of_token_owner(self, unit_env):
        sign_in = await unit_env.get(SignInAnonymouslyUseCase)
        get_current_user = await unit_env.get(GetCurrentUserUseCase)
        session = await sign_in.execute(SignInAnonymouslyRequest())

        response = await get_current_user.execute(
            GetCurrentUserRequest(token=session.token)
        )

        assert response.profile == session.profile

    @pytest.mark.asyncio
    async def test_invalid_token_raises(self, unit_env):
        get_current_user = await unit_env.get(GetCurrentUserUseCase)
        jwt_service = await unit_env.get(JWTService)

        with pytest.raises(JWTError):
            await get_current_user.execute(GetCurrentUserRequest(token="not-a-jwt"))
        assert jwt_service.get_user_id_from_token("not-a-jwt") is None
        assert jwt_service.get_user_id_from_token(None) is None
