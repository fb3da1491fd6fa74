"""Repository pattern implementation.

This module provides data access layer abstractions following the Repository pattern
for clean separation of concerns and improved testability.
"""

from .base import UserRepositoryInterface
from .memory_repository import InMemoryUserRepository
from .sqlalchemy_repository import SQLAlchemyUserRepository

__all__ = [
    'UserRepositoryInterface',
    'SQLAlchemyUserRepository',
    'InMemoryUserRepository',
]
