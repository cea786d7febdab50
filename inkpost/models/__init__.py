"""Database models for the application."""

from inkpost.models.post import PostDB, new_post_id

__all__ = ["PostDB", "new_post_id"]
