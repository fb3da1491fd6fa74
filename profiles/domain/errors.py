"""Error taxonomy for user profile operations.

Every error carries a readable message and an ``ErrorKind`` so callers can
tell business outcomes (not found, duplicate) apart from infrastructure
failures without inspecting message text.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_FIELD = "INVALID_FIELD"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    NOT_FOUND = "NOT_FOUND"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    PERSISTENCE_FAILURE = "PERSISTENCE_FAILURE"


class ProfileError(Exception):
    """Base class for all user profile errors."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidField(ProfileError):
    """A field failed validation; raised before any store access."""

    kind = ErrorKind.INVALID_FIELD

    def __init__(self, field: str, reason: str):
        super().__init__(reason)
        self.field = field
        self.reason = reason


class InvalidArgument(ProfileError):
    """A malformed profile identifier."""

    kind = ErrorKind.INVALID_ARGUMENT


class NotFound(ProfileError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, profile_id: int):
        super().__init__(f"User profile with id {profile_id} not found")
        self.profile_id = profile_id


class DuplicateEmail(ProfileError):
    kind = ErrorKind.DUPLICATE_EMAIL

    def __init__(self, email: str):
        super().__init__(f"User profile with email '{email}' already exists")
        self.email = email


class PersistenceFailure(ProfileError):
    """Store or transaction failure; ``cause`` holds the original exception."""

    kind = ErrorKind.PERSISTENCE_FAILURE

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.cause = cause
