from __future__ import annotations

import datetime

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import declarative_base

Base = declarative_base()

EMAIL_UNIQUE_CONSTRAINT = "uq_user_profiles_email"


def utcnow() -> datetime.datetime:
    """Naive UTC timestamp, stored as-is by every supported dialect."""
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


class UserProfileRow(Base):
    __tablename__ = "user_profiles"
    __table_args__ = (
        UniqueConstraint("email", name=EMAIL_UNIQUE_CONSTRAINT),
        # ids of deleted rows are never handed out again
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    age = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"<UserProfileRow id={self.id} email={self.email}>"
