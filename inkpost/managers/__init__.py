from inkpost.managers.password_manager import (
    PasswordHasher,
    get_password_hasher,
    hash_password,
    verify_password,
)
from inkpost.managers.rate_limiter import limiter, rate_limit_exceeded_handler
from inkpost.managers.token_blacklist import TokenBlacklist, get_token_blacklist
from inkpost.managers.token_manager import create_access_token, decode_access_token

__all__ = [
    "PasswordHasher",
    "TokenBlacklist",
    "create_access_token",
    "decode_access_token",
    "get_password_hasher",
    "get_token_blacklist",
    "hash_password",
    "limiter",
    "rate_limit_exceeded_handler",
    "verify_password",
]
