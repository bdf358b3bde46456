"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error (rejected before any store interaction)."""

    pass


class NotAuthenticatedError(DomainError):
    """Raised when an action requires a signed-in user."""

    def __init__(self, action: str):
        super().__init__(f"Authentication required to {action}")


class NotVerifiedError(DomainError):
    """Raised when an unverified user attempts a gated action."""

    def __init__(self, user_id: str, status: str):
        self.user_id = user_id
        self.status = status
        super().__init__(
            f"User {user_id} is not verified (verification status: {status})"
        )


class InvalidStateTransitionError(DomainError):
    """Raised when a verification status change is not allowed."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move verification status from {current} to {target}")


class VoteConflictError(DomainError):
    """Raised when the vote ledger changed between reading and committing."""

    def __init__(self, user_id: str, post_id: str):
        self.user_id = user_id
        self.post_id = post_id
        super().__init__(
            f"Vote of user {user_id} on post {post_id} changed concurrently"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
