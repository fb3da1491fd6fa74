"""User profile service.

Orchestrates validation, email uniqueness and repository calls for the
create, read, update and delete use cases. Validation and uniqueness are
checked before any write; the store's unique constraint on email stays the
final authority when two writers race past the check.
"""

import logging
from typing import List, Optional

from profiles.domain.entities import UserProfile
from profiles.domain.errors import DuplicateEmail, NotFound
from profiles.domain.validation import validate_profile, validate_profile_id
from profiles.notifications import EventKind, EventNotifier, LoggingEventNotifier
from profiles.repositories.base import UserRepositoryInterface

logger = logging.getLogger(__name__)


class UserService:
    """Use cases for managing user profiles."""

    def __init__(
        self,
        user_repository: UserRepositoryInterface,
        notifier: Optional[EventNotifier] = None,
        timeout: Optional[float] = None,
    ):
        """Initialize the service.

        Args:
            user_repository: Repository owning all store access
            notifier: Sink for created/deleted events, log-only when omitted
            timeout: Per-call transaction budget passed to the repository
        """
        self.user_repository = user_repository
        self.notifier = notifier or LoggingEventNotifier()
        self.timeout = timeout

    def create(self, name, email, age) -> int:
        """Create a new user profile.

        Returns:
            The store-assigned identifier

        Raises:
            InvalidField: If a field fails validation (no store access happens)
            DuplicateEmail: If the email is already used
            PersistenceFailure: If the write fails
        """
        fields = validate_profile(name, email, age)

        if self.user_repository.find_by_email(fields.email, timeout=self.timeout) is not None:
            logger.warning(f"Rejected create: email '{fields.email}' already exists")
            raise DuplicateEmail(fields.email)

        profile = UserProfile(name=fields.name, email=fields.email, age=fields.age)
        profile_id = self.user_repository.save(profile, timeout=self.timeout)

        self.notifier.publish(EventKind.CREATED, profile.email)
        logger.info(f"Created user profile {profile_id} ({profile.email})")
        return profile_id

    def get_by_id(self, profile_id) -> Optional[UserProfile]:
        """Get a profile by ID; None when absent.

        Raises:
            InvalidArgument: If the id is not a positive integer
        """
        profile_id = validate_profile_id(profile_id)
        logger.debug(f"Fetching user profile {profile_id}")
        return self.user_repository.find_by_id(profile_id, timeout=self.timeout)

    def list_all(self) -> List[UserProfile]:
        profiles = self.user_repository.find_all(timeout=self.timeout)
        logger.debug(f"Listed {len(profiles)} user profiles")
        return profiles

    def update(self, profile_id, name, email, age) -> None:
        """Replace name, email and age of an existing profile.

        Identifier and creation timestamp are never changed. The uniqueness
        lookup only runs when the email actually changes.

        Raises:
            InvalidArgument: If the id is not a positive integer
            InvalidField: If a field fails validation
            NotFound: If no profile has this id
            DuplicateEmail: If the new email belongs to another profile
            PersistenceFailure: If the write fails
        """
        profile_id = validate_profile_id(profile_id)
        fields = validate_profile(name, email, age)

        existing = self.user_repository.find_by_id(profile_id, timeout=self.timeout)
        if existing is None:
            logger.warning(f"Rejected update: user profile {profile_id} not found")
            raise NotFound(profile_id)

        if existing.email != fields.email:
            if self.user_repository.find_by_email(fields.email, timeout=self.timeout) is not None:
                logger.warning(f"Rejected update of {profile_id}: email '{fields.email}' already exists")
                raise DuplicateEmail(fields.email)

        existing.name = fields.name
        existing.email = fields.email
        existing.age = fields.age
        self.user_repository.update(existing, timeout=self.timeout)
        logger.info(f"Updated user profile {profile_id}")

    def delete(self, profile_id) -> bool:
        """Delete a profile.

        Returns:
            True if the profile was removed, False if it did not exist
            (including when a concurrent delete won the race)

        Raises:
            InvalidArgument: If the id is not a positive integer
            PersistenceFailure: If the delete fails
        """
        profile_id = validate_profile_id(profile_id)

        existing = self.user_repository.find_by_id(profile_id, timeout=self.timeout)
        if existing is None:
            logger.warning(f"Delete skipped: user profile {profile_id} not found")
            return False

        if not self.user_repository.delete(profile_id, timeout=self.timeout):
            logger.warning(f"Delete skipped: user profile {profile_id} already removed")
            return False

        self.notifier.publish(EventKind.DELETED, existing.email)
        logger.info(f"Deleted user profile {profile_id}")
        return True
