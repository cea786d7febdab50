"""Application settings and configuration constants.

This module contains application settings, constants, and configuration
values for the Inkpost blog backend.
"""

from logging import INFO, Formatter, Logger, getLogger
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path(__file__).parent.parent.parent / ".env"

# --- Constants ---
MAX_PROMPT_LENGTH = 2000
MAX_SUMMARY_SOURCE_LENGTH = 50000

# Response constants
CREATE_POST_ERROR = "Failed to create post. Please try again."
UPDATE_POST_ERROR = "Failed to update post. Please try again."
DELETE_POST_ERROR = "Failed to delete post. Please try again."
UPLOAD_IMAGE_ERROR = "Failed to upload image. Please try again."
LOGIN_ERROR = "Invalid email or password"

# AI Model Configuration
GEMINI_MODEL = "gemini-2.0-flash"


class Settings(BaseSettings):
    """Application settings with validation and default values."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "Inkpost Blog Backend"
    DEBUG: bool = False

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = False
    LOG_FILE: str = "logs/inkpost.log"
    PRODUCTION_FRONTEND_URL: str | None = None

    # Document store
    DATABASE_URL: str = "sqlite+aiosqlite:///./inkpost.db"
    DATABASE_ECHO: bool = False

    # Identity provider
    SECRET_KEY: SecretStr = SecretStr("change-me-in-production")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    JWT_ISSUER: str = "inkpost"
    JWT_AUDIENCE: str = "inkpost-admin"
    ADMIN_EMAIL: str = "admin@example.com"
    ADMIN_PASSWORD_HASH: str = ""

    # AI Configuration
    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = GEMINI_MODEL
    AI_TEMPERATURE: float = 0.7
    AI_MAX_OUTPUT_TOKENS: int = 8192

    # Image host
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: SecretStr = SecretStr("")
    CLOUDINARY_FOLDER: str = "inkpost/posts"
    MEDIA_IMAGE_MAX_SIZE_MB: int = 10
    MEDIA_IMAGE_ALLOWED_TYPES: list[str] = [
        "image/jpeg",
        "image/png",
        "image/webp",
        "image/gif",
    ]

    # Listing
    POSTS_PER_PAGE: int = 9
    EXCERPT_LENGTH: int = 150
    SUMMARY_MAX_LENGTH: int = 200


settings = Settings()


class LimiterConfig(BaseSettings):
    """Rate limiter configuration."""

    model_config = SettingsConfigDict(env_prefix="LIMITER_", case_sensitive=False)

    default_limits: list[str] = ["100/minute"]
    storage_uri: str = "memory://"
    headers_enabled: bool = False
    enabled: bool = True


PACKAGE_LOGGER = "inkpost"


def get_file_handler() -> RotatingFileHandler | None:
    """Return the package's rotating file handler, creating it on first use."""
    if not settings.LOG_TO_FILE:
        return None

    package_logger = getLogger(PACKAGE_LOGGER)
    for handler in package_logger.handlers:
        if isinstance(handler, RotatingFileHandler):
            return handler

    log_file = Path(settings.LOG_FILE)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=5)
    handler.setLevel(INFO)
    handler.setFormatter(Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    package_logger.addHandler(handler)
    return handler


def file_logger(logger: Logger) -> Logger:
    """
    Route a module logger's records to the rotating log file.

    The handler lives on the ``inkpost`` package logger, so every module
    logger below it writes each record exactly once. Does nothing unless
    ``LOG_TO_FILE`` is enabled.

    Args:
        logger: Logger returned by ``logging.getLogger``.

    Returns:
        Logger: The same logger instance.
    """
    get_file_handler()
    return logger
