"""In-memory user profile repository.

Satisfies the same contract as the SQLAlchemy repository without a database:
one lock guards the table, ids are sequential, email uniqueness is enforced
like the store constraint, and callers only ever receive copies.
"""

import itertools
import logging
import threading
from dataclasses import replace
from typing import Dict, List, Optional

from profiles.domain.entities import UserProfile
from profiles.domain.errors import DuplicateEmail, PersistenceFailure
from profiles.models import utcnow

from .base import UserRepositoryInterface

logger = logging.getLogger(__name__)


class InMemoryUserRepository(UserRepositoryInterface):
    """Dict-backed repository for tests and local experiments."""

    def __init__(self, default_timeout: Optional[float] = None):
        self._rows: Dict[int, UserProfile] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self.default_timeout = default_timeout

    def _acquire(self, operation: str, timeout: Optional[float]) -> None:
        budget = self.default_timeout if timeout is None else timeout
        if budget is not None and budget <= 0:
            raise PersistenceFailure(f"Timed out after {budget:.3f}s while trying to {operation}")
        acquired = self._lock.acquire(timeout=budget) if budget is not None else self._lock.acquire()
        if not acquired:
            raise PersistenceFailure(f"Timed out after {budget:.3f}s while trying to {operation}")

    def _email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        return any(row.email == email and row.id != exclude_id for row in self._rows.values())

    def save(self, profile: UserProfile, timeout: Optional[float] = None) -> int:
        self._acquire("save user profile", timeout)
        try:
            if self._email_taken(profile.email):
                raise DuplicateEmail(profile.email)
            profile_id = next(self._ids)
            created_at = utcnow()
            self._rows[profile_id] = replace(profile, id=profile_id, created_at=created_at)
        finally:
            self._lock.release()

        profile.id = profile_id
        profile.created_at = created_at
        logger.info(f"Created UserProfile with id {profile_id}")
        return profile_id

    def find_by_id(self, profile_id: int, timeout: Optional[float] = None) -> Optional[UserProfile]:
        self._acquire(f"find user profile {profile_id}", timeout)
        try:
            row = self._rows.get(profile_id)
            return replace(row) if row else None
        finally:
            self._lock.release()

    def find_by_email(self, email: str, timeout: Optional[float] = None) -> Optional[UserProfile]:
        self._acquire("find user profile by email", timeout)
        try:
            for row in self._rows.values():
                if row.email == email:
                    return replace(row)
            return None
        finally:
            self._lock.release()

    def find_all(self, timeout: Optional[float] = None) -> List[UserProfile]:
        self._acquire("list user profiles", timeout)
        try:
            return [replace(self._rows[key]) for key in sorted(self._rows)]
        finally:
            self._lock.release()

    def update(self, profile: UserProfile, timeout: Optional[float] = None) -> None:
        operation = f"update user profile {profile.id}"
        self._acquire(operation, timeout)
        try:
            existing = self._rows.get(profile.id)
            if existing is None:
                raise PersistenceFailure(f"Cannot {operation}: row no longer exists")
            if self._email_taken(profile.email, exclude_id=profile.id):
                raise DuplicateEmail(profile.email)
            self._rows[profile.id] = existing.with_fields(profile.name, profile.email, profile.age)
        finally:
            self._lock.release()
        logger.info(f"Updated UserProfile with id {profile.id}")

    def delete(self, profile_id: int, timeout: Optional[float] = None) -> bool:
        self._acquire(f"delete user profile {profile_id}", timeout)
        try:
            removed = self._rows.pop(profile_id, None)
        finally:
            self._lock.release()
        if removed is None:
            return False
        logger.info(f"Deleted UserProfile with id {profile_id}")
        return True
