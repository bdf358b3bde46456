"""Mapping of domain errors onto HTTP errors."""

import logfire
from fastapi import HTTPException, status

from crushboard.domain.error import (
    DomainError,
    InvalidStateTransitionError,
    NotAuthenticatedError,
    NotFoundError,
    NotVerifiedError,
    ValidationError,
    VoteConflictError,
)

_STATUS_CODES: dict[type[DomainError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotAuthenticatedError: status.HTTP_401_UNAUTHORIZED,
    NotVerifiedError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidStateTransitionError: status.HTTP_409_CONFLICT,
    VoteConflictError: status.HTTP_409_CONFLICT,
}


def domain_http_error(error: DomainError) -> HTTPException:
    """Translate a domain error into the HTTPException to raise.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException carrying the error message
    """
    status_code = next(
        (
            code
            for error_type, code in _STATUS_CODES.items()
            if isinstance(error, error_type)
        ),
        status.HTTP_400_BAD_REQUEST,
    )
    logfire.warn(
        "Domain error", error=str(error), error_type=type(error).__name__
    )
    return HTTPException(status_code=status_code, detail=str(error))


def unexpected_http_error(action: str, error: Exception) -> HTTPException:
    """Generic failure for store or programming errors.

    Args:
        action: What failed, e.g. "cast vote"
        error: The unexpected exception
    """
    logfire.error(
        f"Unexpected error: {action}",
        error=str(error),
        error_type=type(error).__name__,
    )
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action}",
    )
