"""Authentication service for the single admin account."""

from logging import getLogger

from inkpost.configs import file_logger, settings
from inkpost.managers.password_manager import verify_password
from inkpost.managers.token_blacklist import TokenBlacklist, get_token_blacklist
from inkpost.managers.token_manager import create_access_token, decode_access_token
from inkpost.schemas.auth import Identity, SessionStatus, Token

logger = file_logger(getLogger(__name__))


class AuthService:
    """
    Identity provider for the admin area.

    There is exactly one account, configured through ``ADMIN_EMAIL`` and
    ``ADMIN_PASSWORD_HASH``. Sessions are stateless JWTs; logout revokes a
    token by adding its ``jti`` to the blacklist.
    """

    def __init__(
        self,
        token_blacklist: TokenBlacklist | None = None,
        admin_email: str | None = None,
        admin_password_hash: str | None = None,
    ) -> None:
        """
        Initialize the auth service.

        Args:
            token_blacklist: Revocation list, defaults to the process-wide one
            admin_email: Overrides ``ADMIN_EMAIL``
            admin_password_hash: Overrides ``ADMIN_PASSWORD_HASH``
        """
        self._blacklist = token_blacklist or get_token_blacklist()
        self._admin_email = (admin_email or settings.ADMIN_EMAIL).strip().lower()
        self._admin_password_hash = (
            admin_password_hash if admin_password_hash is not None else settings.ADMIN_PASSWORD_HASH
        )

    async def login(self, email: str, password: str) -> Token | None:
        """
        Exchange admin credentials for an access token.

        Args:
            email: Admin e-mail, compared case-insensitively
            password: Plaintext password

        Returns:
            Token | None: Access token, or None on bad credentials
        """
        email_matches = email.strip().lower() == self._admin_email
        # Verify even on an e-mail mismatch so timing does not leak which part failed
        password_matches = await verify_password(password, self._admin_password_hash)

        if not (email_matches and password_matches):
            logger.warning("Failed admin login attempt")
            return None

        access_token, expires_at = create_access_token(self._admin_email)
        logger.info("Admin signed in")
        return Token(access_token=access_token, expires_at=expires_at)

    async def logout(self, token: str) -> bool:
        """
        Revoke an access token.

        Args:
            token: Bearer token to revoke

        Returns:
            bool: True if the token was valid and is now revoked
        """
        token_data = decode_access_token(token)
        if token_data is None:
            return False
        await self._blacklist.add_to_blacklist(token_data.jti, token_data.expires_at)
        logger.info("Admin signed out")
        return True

    async def current_identity(self, token: str | None) -> Identity | None:
        """
        Resolve the admin behind a bearer token.

        Args:
            token: Bearer token, possibly missing

        Returns:
            Identity | None: The admin, or None for missing, invalid,
            expired, revoked or foreign tokens
        """
        if not token:
            return None

        token_data = decode_access_token(token)
        if token_data is None:
            return None
        if token_data.email.lower() != self._admin_email:
            return None
        if await self._blacklist.is_blacklisted(token_data.jti):
            return None

        return Identity(
            email=token_data.email,
            jti=token_data.jti,
            expires_at=token_data.expires_at,
        )

    async def session(self, token: str | None) -> SessionStatus:
        """Report whether ``token`` belongs to an active admin session."""
        identity = await self.current_identity(token)
        return SessionStatus(authenticated=identity is not None, identity=identity)
