from collections.abc import Awaitable, Callable
from logging import getLogger

from fastapi.responses import ORJSONResponse
from starlette.requests import Request
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from inkpost.configs import file_logger
from inkpost.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class AiError(BaseAppError):
    """Base exception for AI client errors. The detail is shown to the author as-is."""

    def __init__(self, detail: str = "Failed to generate post content. Please try again.") -> None:
        super().__init__(
            detail=detail,
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        )


class AiNotConfiguredError(AiError):
    """No API key is configured."""

    def __init__(
        self,
        detail: str = (
            "Gemini API key is not configured. "
            "Please add GEMINI_API_KEY to your environment variables."
        ),
    ) -> None:
        super().__init__(detail)
        self.status_code = HTTP_503_SERVICE_UNAVAILABLE


class AiAuthenticationError(AiError):
    """The upstream rejected the API key."""

    def __init__(
        self,
        detail: str = "Invalid API key. Please check your GEMINI_API_KEY.",
    ) -> None:
        super().__init__(detail)
        self.status_code = HTTP_401_UNAUTHORIZED


class AiModelNotFoundError(AiError):
    """The configured model is unavailable."""

    def __init__(
        self,
        detail: str = "Model not found. Please check your API key and model availability.",
    ) -> None:
        super().__init__(detail)
        self.status_code = HTTP_404_NOT_FOUND


class AiResponseError(AiError):
    """Structured output could not be parsed."""

    def __init__(
        self,
        detail: str = "Failed to parse AI response. Please try again with a different prompt.",
    ) -> None:
        super().__init__(detail)
        self.status_code = HTTP_502_BAD_GATEWAY


class AiInvalidInputError(AiError):
    """Request rejected before reaching the model."""

    def __init__(self, detail: str = "Content cannot be empty.") -> None:
        super().__init__(detail)
        self.status_code = HTTP_400_BAD_REQUEST


ai_exception_handler: Callable[[Request, Exception], Awaitable[ORJSONResponse]] = (
    create_exception_handler(logger)
)
