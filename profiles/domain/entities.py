"""Domain entities representing the persisted user profile."""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional


@dataclass
class UserProfile:
    """User profile domain entity.

    ``id`` and ``created_at`` are assigned by the store on first persist and
    are never changed afterwards; only name, email and age are mutable.
    """

    name: str
    email: str
    age: int
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def with_fields(self, name: str, email: str, age: int) -> "UserProfile":
        """Return a copy carrying new mutable fields and the same identity."""
        return replace(self, name=name, email=email, age=age)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "age": self.age,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
