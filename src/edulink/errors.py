"""Error taxonomy shared by the stats engine, repositories and services."""

from __future__ import annotations


class EduLinkError(Exception):
    """Base class for all EduLink errors."""


class InvalidInput(EduLinkError, ValueError):
    """Raised when a caller violates an input contract (negative counts, bad config)."""


class ProfileValidationError(InvalidInput):
    """Raised when profile fields fail role-aware validation.

    ``errors`` maps each offending field to a user-facing message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))


class Unavailable(EduLinkError):
    """Raised by a repository when the backing store cannot be reached."""


class UserNotFound(EduLinkError, LookupError):
    """Raised when a user id does not resolve to a stored user."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")
