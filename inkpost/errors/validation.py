"""Request validation error handling."""

from logging import getLogger
from typing import Any, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_422_UNPROCESSABLE_CONTENT

from inkpost.configs import file_logger
from inkpost.utils.helpers import host

logger = file_logger(getLogger(__name__))

VALUE_ERROR_PREFIX = "Value error, "


def format_validation_error(error: dict[str, Any]) -> dict[str, Any]:
    """
    Flatten one pydantic error into a client-facing entry.

    Raw input values are left out so that passwords and tokens never echo
    back in responses or logs.
    """
    message = str(error.get("msg", "Invalid value")).removeprefix(VALUE_ERROR_PREFIX)
    formatted: dict[str, Any] = {
        "field": ".".join(str(loc) for loc in error.get("loc", [])[1:]),  # Skip 'body'
        "message": message,
        "type": error.get("type", "validation_error"),
    }
    if ctx := error.get("ctx"):
        formatted["context"] = {
            key: str(value) if isinstance(value, Exception) else value for key, value in ctx.items()
        }
    return formatted


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle Pydantic validation errors with cleaner response format.

    The first error's message becomes ``detail`` so authoring forms can show
    it directly (for example "Title and content are required").

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with formatted validation errors.
    """
    exec_error = cast(RequestValidationError, exc)
    formatted_errors = [format_validation_error(error) for error in exec_error.errors()]

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: {formatted_errors}",
    )

    return ORJSONResponse(
        status_code=HTTP_422_UNPROCESSABLE_CONTENT,
        content={
            "detail": formatted_errors[0]["message"] if formatted_errors else "Validation failed",
            "errors": formatted_errors,
        },
    )
