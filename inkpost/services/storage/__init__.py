"""
Storage services package.

This package provides the image host used for post cover images.
"""

from inkpost.services.storage.base import ImageStorage
from inkpost.services.storage.cloudinary_storage import CloudinaryStorage


def get_storage_service() -> ImageStorage:
    """
    Get the configured image host.

    Returns:
        ImageStorage: Configured storage service instance
    """
    return CloudinaryStorage()


__all__ = [
    "CloudinaryStorage",
    "ImageStorage",
    "get_storage_service",
]
