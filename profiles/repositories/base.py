"""Repository interface for user profiles.

Every operation runs in its own transaction: implementations never share a
transaction or connection between calls, and never cache records between
calls, so each read reflects the latest committed state.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from profiles.domain.entities import UserProfile


class UserRepositoryInterface(ABC):
    """Interface for user profile persistence."""

    @abstractmethod
    def save(self, profile: UserProfile, timeout: Optional[float] = None) -> int:
        """Persist a new profile and assign its id and creation timestamp.

        Args:
            profile: Unsaved profile; its ``id`` and ``created_at`` are set on success
            timeout: Transaction budget in seconds, overriding the default

        Returns:
            The assigned identifier

        Raises:
            DuplicateEmail: If the store rejects the email as already used
            PersistenceFailure: On any other store failure (after rollback)
        """

    @abstractmethod
    def find_by_id(self, profile_id: int, timeout: Optional[float] = None) -> Optional[UserProfile]:
        """Get profile by ID, or None when absent."""

    @abstractmethod
    def find_by_email(self, email: str, timeout: Optional[float] = None) -> Optional[UserProfile]:
        """Get profile by exact email match, or None when absent."""

    @abstractmethod
    def find_all(self, timeout: Optional[float] = None) -> List[UserProfile]:
        """Get all profiles ordered by id."""

    @abstractmethod
    def update(self, profile: UserProfile, timeout: Optional[float] = None) -> None:
        """Replace name, email and age of an existing profile.

        Raises:
            DuplicateEmail: If the new email is already used by another row
            PersistenceFailure: If the row no longer exists or the write fails
        """

    @abstractmethod
    def delete(self, profile_id: int, timeout: Optional[float] = None) -> bool:
        """Delete profile by ID.

        Returns:
            True if a row was removed, False if none existed
        """
