"""In-process token blacklist for JWT revocation."""

from asyncio import Lock
from datetime import UTC, datetime
from logging import getLogger

from inkpost.configs import file_logger

logger = file_logger(getLogger(__name__))


class TokenBlacklist:
    """
    Blacklist of revoked token ids (JTI) kept until the token would expire.

    Expired entries are pruned lazily on every write, so the set never
    outgrows the number of live revoked tokens.
    """

    def __init__(self) -> None:
        self._revoked: dict[str, datetime] = {}
        self._lock = Lock()

    def _prune(self, now: datetime) -> None:
        for jti in [jti for jti, exp in self._revoked.items() if exp <= now]:
            del self._revoked[jti]

    async def add_to_blacklist(self, jti: str, exp: datetime) -> bool:
        """
        Add a token to the blacklist.

        Args:
            jti: JWT ID to blacklist
            exp: Token expiration time

        Returns:
            bool: True once the token is revoked
        """
        now = datetime.now(UTC)
        async with self._lock:
            self._prune(now)
            if exp <= now:
                logger.debug(f"Token {jti} already expired, skipping blacklist")
                return True
            self._revoked[jti] = exp
        logger.debug(f"Token {jti} blacklisted until {exp.isoformat()}")
        return True

    async def is_blacklisted(self, jti: str) -> bool:
        """
        Check if a token is blacklisted.

        Args:
            jti: JWT ID to check

        Returns:
            bool: True if token is blacklisted
        """
        exp = self._revoked.get(jti)
        return exp is not None and exp > datetime.now(UTC)

    async def get_blacklist_count(self) -> int:
        """Number of revoked tokens that have not expired yet."""
        now = datetime.now(UTC)
        return sum(1 for exp in self._revoked.values() if exp > now)

    async def clear(self) -> None:
        async with self._lock:
            self._revoked.clear()


_token_blacklist = TokenBlacklist()


def get_token_blacklist() -> TokenBlacklist:
    """
    Get the process-wide token blacklist.

    Returns:
        TokenBlacklist: Shared blacklist instance
    """
    return _token_blacklist
