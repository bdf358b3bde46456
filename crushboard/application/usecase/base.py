"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from crushboard.domain.value import UserId


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def optional_user_id(user_id: str | None) -> UserId | None:
    """Parse the caller's user ID, None when not signed in."""
    return UserId(UUID(user_id)) if user_id else None
