from inkpost.configs.settings import (
    LimiterConfig,
    Settings,
    file_logger,
    get_file_handler,
    settings,
)

__all__ = [
    "LimiterConfig",
    "Settings",
    "file_logger",
    "get_file_handler",
    "settings",
]
