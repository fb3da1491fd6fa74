"""Field-level validation for user profiles.

Pure functions with no I/O. Rules are checked in a fixed order and the first
failure is raised as ``InvalidField``.
"""

from typing import Any, NamedTuple

from .errors import InvalidArgument, InvalidField

MAX_NAME_LENGTH = 100
MIN_AGE = 0
MAX_AGE = 150


class ProfileFields(NamedTuple):
    """Validated, whitespace-trimmed profile fields."""

    name: str
    email: str
    age: int


def validate_profile(name: Any, email: Any, age: Any) -> ProfileFields:
    """Validate name, email and age.

    Args:
        name: Display name, non-empty after trimming, at most 100 characters
        email: Address containing '@' and '.'
        age: Integer between 0 and 150 inclusive

    Returns:
        ProfileFields with name and email trimmed

    Raises:
        InvalidField: On the first rule that fails
    """
    if name is None or not isinstance(name, str) or not name.strip():
        raise InvalidField("name", "Name must not be empty")
    name = name.strip()
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidField("name", f"Name must not exceed {MAX_NAME_LENGTH} characters")

    if email is None or not isinstance(email, str) or not email.strip():
        raise InvalidField("email", "Email must not be empty")
    email = email.strip()
    # structural check only, not RFC 5322
    if "@" not in email or "." not in email:
        raise InvalidField("email", f"Invalid email format: {email}")

    if age is None:
        raise InvalidField("age", "Age is required")
    if isinstance(age, bool) or not isinstance(age, int):
        raise InvalidField("age", "Age must be an integer")
    if age < MIN_AGE or age > MAX_AGE:
        raise InvalidField("age", f"Age must be between {MIN_AGE} and {MAX_AGE}")

    return ProfileFields(name=name, email=email, age=age)


def validate_profile_id(profile_id: Any) -> int:
    """Ensure a profile identifier is a positive integer.

    Raises:
        InvalidArgument: If the identifier is missing, not an int, or not positive
    """
    if profile_id is None or isinstance(profile_id, bool) or not isinstance(profile_id, int):
        raise InvalidArgument(f"Profile id must be a positive integer, got {profile_id!r}")
    if profile_id <= 0:
        raise InvalidArgument(f"Profile id must be a positive integer, got {profile_id}")
    return profile_id
