"""Application services coordinating the domain and the repositories."""

from .user_service import UserService

__all__ = ['UserService']
