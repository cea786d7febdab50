"""
Cloudinary storage implementation.

Uploads post cover images to Cloudinary, which serves them from its CDN
with automatic format and quality optimization.
"""

import asyncio
from functools import partial
from logging import getLogger
from uuid import uuid4

import cloudinary
import cloudinary.uploader

from inkpost.configs import file_logger, settings

logger = file_logger(getLogger(__name__))


class CloudinaryStorage:
    """Cloudinary-backed image host for post cover images."""

    def __init__(self, folder: str | None = None) -> None:
        """Initialize Cloudinary with configured credentials."""
        cloudinary.config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET.get_secret_value(),
            secure=True,
        )
        self.folder = folder or settings.CLOUDINARY_FOLDER

    @property
    def is_configured(self) -> bool:
        return bool(
            settings.CLOUDINARY_CLOUD_NAME
            and settings.CLOUDINARY_API_KEY
            and settings.CLOUDINARY_API_SECRET.get_secret_value(),
        )

    def _get_public_id(self, image_id: str) -> str:
        """
        Get the Cloudinary public ID for an image.

        Args:
            image_id: Unique identifier for the image

        Returns:
            str: Cloudinary public ID
        """
        return f"{self.folder}/{image_id}"

    async def upload_image(self, file_data: bytes, content_type: str) -> str:
        """
        Upload an image to Cloudinary.

        Args:
            file_data: Raw image bytes
            content_type: MIME type of the image

        Returns:
            str: Secure CDN URL of the uploaded image
        """
        public_id = self._get_public_id(uuid4().hex)

        # Run blocking Cloudinary upload in thread pool
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(
            None,
            partial(
                cloudinary.uploader.upload,
                file_data,
                public_id=public_id,
                overwrite=False,
                resource_type="image",
                transformation=[{"quality": "auto:good", "fetch_format": "auto"}],
            ),
        )
        logger.info(f"Uploaded {content_type} image to {public_id}")
        return result["secure_url"]
