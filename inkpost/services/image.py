"""
Image upload service.

Validates post cover images before handing them to the image host and
turns any host failure into a single, author-facing upload error.
"""

from logging import getLogger

from fastapi import UploadFile

from inkpost.configs import file_logger, settings
from inkpost.errors.upload import (
    EmptyFileError,
    ImageTooLargeError,
    UnsupportedImageTypeError,
    UploadError,
)
from inkpost.services.storage import ImageStorage, get_storage_service

logger = file_logger(getLogger(__name__))


class ImageService:
    """Service for uploading post cover images."""

    def __init__(self, storage: ImageStorage | None = None) -> None:
        """
        Initialize the image service.

        Args:
            storage: Optional storage service instance. If not provided,
                    the default storage service will be used.
        """
        self.storage = storage or get_storage_service()
        self.image_max_size_bytes = settings.MEDIA_IMAGE_MAX_SIZE_MB * 1024 * 1024
        self.image_allowed_types = settings.MEDIA_IMAGE_ALLOWED_TYPES

    def _validate_image_type(self, content_type: str | None) -> None:
        """Validate image content type."""
        if not content_type or content_type not in self.image_allowed_types:
            raise UnsupportedImageTypeError(
                content_type=content_type or "unknown",
                allowed_types=self.image_allowed_types,
            )

    def _validate_image_size(self, file_data: bytes) -> None:
        """Validate image file size."""
        actual_size = len(file_data)
        if actual_size == 0:
            raise EmptyFileError
        if actual_size > self.image_max_size_bytes:
            raise ImageTooLargeError(
                max_size_mb=settings.MEDIA_IMAGE_MAX_SIZE_MB,
                actual_size_mb=actual_size / (1024 * 1024),
            )

    async def upload_image(self, file_data: bytes, content_type: str | None) -> str:
        """
        Validate and upload an image.

        Args:
            file_data: Raw image bytes
            content_type: MIME type declared by the client

        Returns:
            str: Public URL of the uploaded image

        Raises:
            UnsupportedImageTypeError: If the type is not an allowed image type
            EmptyFileError: If the file has no content
            ImageTooLargeError: If the file exceeds the size limit
            UploadError: If the image host fails
        """
        self._validate_image_type(content_type)
        self._validate_image_size(file_data)

        try:
            # pyrefly: ignore [bad-argument-type]
            return await self.storage.upload_image(file_data, content_type)
        except Exception as e:
            logger.exception("Image upload failed")
            raise UploadError from e

    async def upload_file(self, file: UploadFile) -> str:
        """
        Read an uploaded multipart file and upload it.

        The content type and the declared part size are checked before the
        body is read into memory.
        """
        self._validate_image_type(file.content_type)
        if file.size is not None and file.size > self.image_max_size_bytes:
            raise ImageTooLargeError(
                max_size_mb=settings.MEDIA_IMAGE_MAX_SIZE_MB,
                actual_size_mb=file.size / (1024 * 1024),
            )
        file_data = await file.read()
        return await self.upload_image(file_data, file.content_type)
