"""Domain layer - the user profile entity, its validation rules and errors.

This layer has no I/O and no dependency on the store or the web framework.
"""

from .entities import UserProfile
from .errors import (
    DuplicateEmail,
    ErrorKind,
    InvalidArgument,
    InvalidField,
    NotFound,
    PersistenceFailure,
    ProfileError,
)
from .validation import ProfileFields, validate_profile, validate_profile_id

__all__ = [
    'UserProfile',
    'ErrorKind', 'ProfileError', 'InvalidField', 'InvalidArgument',
    'NotFound', 'DuplicateEmail', 'PersistenceFailure',
    'ProfileFields', 'validate_profile', 'validate_profile_id',
]
