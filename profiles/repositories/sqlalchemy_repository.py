"""SQLAlchemy implementation of the user profile repository.

Each call opens its own session from the injected session factory, runs in a
single transaction and either commits or rolls back before returning. Store
exceptions never escape raw: they are re-signalled as ``PersistenceFailure``
(or ``DuplicateEmail`` when the email unique constraint fires).
"""

import logging
import time
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from profiles.domain.entities import UserProfile
from profiles.domain.errors import DuplicateEmail, PersistenceFailure, ProfileError
from profiles.models import EMAIL_UNIQUE_CONSTRAINT, UserProfileRow, utcnow

from .base import UserRepositoryInterface

logger = logging.getLogger(__name__)


def _map_profile(row: UserProfileRow) -> UserProfile:
    return UserProfile(
        id=row.id,
        name=row.name,
        email=row.email,
        age=row.age,
        created_at=row.created_at,
    )


def _is_email_conflict(exc: IntegrityError) -> bool:
    # sqlite: "UNIQUE constraint failed: user_profiles.email"
    # postgresql: 'duplicate key value violates unique constraint "uq_user_profiles_email"'
    message = str(exc.orig)
    return EMAIL_UNIQUE_CONSTRAINT in message or "user_profiles.email" in message


class SQLAlchemyUserRepository(UserRepositoryInterface):
    """User profile repository backed by a relational store."""

    def __init__(self, session_factory: sessionmaker, default_timeout: Optional[float] = None):
        """Initialize repository with a session factory.

        Args:
            session_factory: Store handle producing a fresh Session per call
            default_timeout: Transaction budget in seconds used when a call passes none
        """
        self._session_factory = session_factory
        self.default_timeout = default_timeout

    @contextmanager
    def _transaction(
        self, operation: str, timeout: Optional[float] = None, email: Optional[str] = None
    ) -> Iterator[Session]:
        """Run one unit of work: commit on success, roll back on any failure."""
        budget = self.default_timeout if timeout is None else timeout
        started = time.monotonic()
        session = self._session_factory()
        try:
            self._apply_statement_timeout(session, budget)
            yield session
            if budget is not None and time.monotonic() - started > budget:
                raise PersistenceFailure(f"Timed out after {budget:.3f}s while trying to {operation}")
            session.commit()
        except ProfileError as e:
            session.rollback()
            logger.error(f"Rolled back {operation}: {e}")
            raise
        except IntegrityError as e:
            session.rollback()
            logger.error(f"Integrity error, rolled back {operation}: {e.orig}")
            if email is not None and _is_email_conflict(e):
                raise DuplicateEmail(email) from e
            raise PersistenceFailure(f"Failed to {operation}", e) from e
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Database error, rolled back {operation}: {e}")
            raise PersistenceFailure(f"Failed to {operation}", e) from e
        finally:
            session.close()

    @staticmethod
    def _apply_statement_timeout(session: Session, budget: Optional[float]) -> None:
        if budget is None:
            return
        if session.get_bind().dialect.name == "postgresql":
            # SET LOCAL lasts until the end of the current transaction
            session.execute(text(f"SET LOCAL statement_timeout = {max(1, int(budget * 1000))}"))

    def save(self, profile: UserProfile, timeout: Optional[float] = None) -> int:
        with self._transaction("save user profile", timeout, email=profile.email) as session:
            row = UserProfileRow(
                name=profile.name,
                email=profile.email,
                age=profile.age,
                created_at=utcnow(),
            )
            session.add(row)
            session.flush()
            profile_id, created_at = row.id, row.created_at

        profile.id = profile_id
        profile.created_at = created_at
        logger.info(f"Created UserProfile with id {profile_id}")
        return profile_id

    def find_by_id(self, profile_id: int, timeout: Optional[float] = None) -> Optional[UserProfile]:
        with self._transaction(f"find user profile {profile_id}", timeout) as session:
            row = session.get(UserProfileRow, profile_id)
            return _map_profile(row) if row else None

    def find_by_email(self, email: str, timeout: Optional[float] = None) -> Optional[UserProfile]:
        with self._transaction("find user profile by email", timeout) as session:
            row = session.query(UserProfileRow).filter(UserProfileRow.email == email).first()
            return _map_profile(row) if row else None

    def find_all(self, timeout: Optional[float] = None) -> List[UserProfile]:
        with self._transaction("list user profiles", timeout) as session:
            rows = session.query(UserProfileRow).order_by(UserProfileRow.id).all()
            return [_map_profile(row) for row in rows]

    def update(self, profile: UserProfile, timeout: Optional[float] = None) -> None:
        operation = f"update user profile {profile.id}"
        with self._transaction(operation, timeout, email=profile.email) as session:
            row = session.get(UserProfileRow, profile.id)
            if row is None:
                raise PersistenceFailure(f"Cannot {operation}: row no longer exists")
            row.name = profile.name
            row.email = profile.email
            row.age = profile.age
            session.flush()
        logger.info(f"Updated UserProfile with id {profile.id}")

    def delete(self, profile_id: int, timeout: Optional[float] = None) -> bool:
        with self._transaction(f"delete user profile {profile_id}", timeout) as session:
            row = session.get(UserProfileRow, profile_id)
            if row is None:
                return False
            session.delete(row)
            session.flush()
        logger.info(f"Deleted UserProfile with id {profile_id}")
        return True
