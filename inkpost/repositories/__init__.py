"""Repository layer for database operations."""

from inkpost.repositories.post import PostRepository

__all__ = ["PostRepository"]
