"""Authentication errors."""

from logging import getLogger

from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_500_INTERNAL_SERVER_ERROR

from inkpost.configs import file_logger
from inkpost.configs.settings import LOGIN_ERROR
from inkpost.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class AuthenticationError(BaseAppError):
    """Base class for authentication errors."""

    def __init__(
        self,
        detail: str = "Could not validate credentials",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code)


class InvalidCredentialsError(AuthenticationError):
    """Raised when the admin e-mail or password is wrong."""

    def __init__(self) -> None:
        super().__init__(LOGIN_ERROR, HTTP_401_UNAUTHORIZED)


class PasswordHashingError(BaseAppError):
    """Raised when a password cannot be hashed."""

    def __init__(self, detail: str = "Failed to hash password") -> None:
        super().__init__(detail, HTTP_500_INTERNAL_SERVER_ERROR)


auth_exception_handler = create_exception_handler(logger)
