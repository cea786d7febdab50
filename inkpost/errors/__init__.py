from inkpost.errors.ai import (
    AiAuthenticationError,
    AiError,
    AiInvalidInputError,
    AiModelNotFoundError,
    AiNotConfiguredError,
    AiResponseError,
    ai_exception_handler,
)
from inkpost.errors.auth import (
    AuthenticationError,
    InvalidCredentialsError,
    PasswordHashingError,
    auth_exception_handler,
)
from inkpost.errors.base import BaseAppError, create_exception_handler
from inkpost.errors.database import (
    DatabaseError,
    DatabaseInitializationError,
    database_exception_handler,
)
from inkpost.errors.upload import (
    EmptyFileError,
    ImageTooLargeError,
    UnsupportedImageTypeError,
    UploadError,
    upload_exception_handler,
)
from inkpost.errors.validation import validation_exception_handler

__all__ = [
    "AiAuthenticationError",
    "AiError",
    "AiInvalidInputError",
    "AiModelNotFoundError",
    "AiNotConfiguredError",
    "AiResponseError",
    "AuthenticationError",
    "BaseAppError",
    "DatabaseError",
    "DatabaseInitializationError",
    "EmptyFileError",
    "ImageTooLargeError",
    "InvalidCredentialsError",
    "PasswordHashingError",
    "UnsupportedImageTypeError",
    "UploadError",
    "ai_exception_handler",
    "auth_exception_handler",
    "create_exception_handler",
    "database_exception_handler",
    "upload_exception_handler",
    "validation_exception_handler",
]
