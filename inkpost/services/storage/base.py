"""
Base storage protocol for image uploads.

This module defines the interface for image hosts, allowing for different
implementations (Cloudinary, S3, an in-memory fake in tests, etc.).
"""

from abc import abstractmethod
from typing import Protocol


class ImageStorage(Protocol):
    """
    Protocol defining the interface for image hosts.

    Implementations return a public, absolute URL for every stored image.
    """

    @abstractmethod
    async def upload_image(self, file_data: bytes, content_type: str) -> str:
        """
        Upload an image.

        Args:
            file_data: Raw image bytes
            content_type: MIME type of the image

        Returns:
            str: Public URL of the uploaded image
        """
        ...

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the backend has the credentials it needs."""
        ...
