"""HTTP routes exposing the user profile operations."""

from .user_routes import bp as users_bp

__all__ = ['users_bp']
