"""Custom exception hierarchy for the user profile backend."""
from __future__ import annotations


class UserProfileError(Exception):
    """Base exception for all user profile errors."""

    code = "internal"


class InvalidArgumentError(UserProfileError):
    """Raised for malformed input such as an out-of-range rating."""

    code = "invalid_argument"


class AuthenticationError(UserProfileError):
    """Raised when the bearer token is missing or cannot be verified."""

    code = "unauthorized"


class ForbiddenError(UserProfileError):
    """Raised when the authenticated subject does not own the target record."""

    code = "forbidden"


class UserNotFoundError(UserProfileError):
    """Raised when an operation requires a user record that does not exist."""

    code = "not_found"

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")


class ConflictError(UserProfileError):
    """Raised when a concurrent write wins and retries are exhausted."""

    code = "conflict"


class StorageUnavailableError(UserProfileError):
    """Raised when the document store call fails."""
