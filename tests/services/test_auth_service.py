"""Tests for the single-admin identity provider."""

from datetime import timedelta

from pytest import fixture, mark

from inkpost.managers.password_manager import PasswordHasher
from inkpost.managers.token_blacklist import TokenBlacklist
from inkpost.managers.token_manager import create_access_token
from inkpost.services.auth import AuthService

ADMIN_EMAIL = "admin@example.com"


@fixture(scope="module")
def admin_password_hash() -> str:
    return PasswordHasher(memory_cost=1024, time_cost=1, parallelism=1).hash("secret")


@fixture
def auth_service(admin_password_hash: str) -> AuthService:
    return AuthService(
        token_blacklist=TokenBlacklist(),
        admin_email=ADMIN_EMAIL,
        admin_password_hash=admin_password_hash,
    )


class TestLogin:
    @mark.asyncio
    async def test_valid_credentials_issue_token(self, auth_service: AuthService) -> None:
        token = await auth_service.login(ADMIN_EMAIL, "secret")

        assert token is not None
        assert token.token_type == "bearer"
        assert token.expires_at is not None

    @mark.asyncio
    async def test_email_is_case_insensitive(self, auth_service: AuthService) -> None:
        assert await auth_service.login("  Admin@Example.COM ", "secret") is not None

    @mark.asyncio
    async def test_wrong_password(self, auth_service: AuthService) -> None:
        assert await auth_service.login(ADMIN_EMAIL, "wrong") is None

    @mark.asyncio
    async def test_wrong_email(self, auth_service: AuthService) -> None:
        assert await auth_service.login("someone@example.com", "secret") is None

    @mark.asyncio
    async def test_unconfigured_password_hash_never_logs_in(self) -> None:
        service = AuthService(
            token_blacklist=TokenBlacklist(),
            admin_email=ADMIN_EMAIL,
            admin_password_hash="",
        )

        assert await service.login(ADMIN_EMAIL, "") is None


class TestIdentity:
    @mark.asyncio
    async def test_current_identity_for_fresh_token(self, auth_service: AuthService) -> None:
        token = await auth_service.login(ADMIN_EMAIL, "secret")
        assert token is not None

        identity = await auth_service.current_identity(token.access_token)

        assert identity is not None
        assert identity.email == ADMIN_EMAIL

    @mark.asyncio
    async def test_missing_or_invalid_token(self, auth_service: AuthService) -> None:
        assert await auth_service.current_identity(None) is None
        assert await auth_service.current_identity("") is None
        assert await auth_service.current_identity("garbage") is None

    @mark.asyncio
    async def test_expired_token(self, auth_service: AuthService) -> None:
        token, _ = create_access_token(ADMIN_EMAIL, expires_delta=timedelta(seconds=-5))

        assert await auth_service.current_identity(token) is None

    @mark.asyncio
    async def test_token_for_another_account(self, auth_service: AuthService) -> None:
        token, _ = create_access_token("intruder@example.com")

        assert await auth_service.current_identity(token) is None

    @mark.asyncio
    async def test_session_status(self, auth_service: AuthService) -> None:
        token = await auth_service.login(ADMIN_EMAIL, "secret")
        assert token is not None

        active = await auth_service.session(token.access_token)
        anonymous = await auth_service.session(None)

        assert active.authenticated is True
        assert active.identity is not None
        assert anonymous.authenticated is False
        assert anonymous.identity is None


class TestLogout:
    @mark.asyncio
    async def test_logout_revokes_token(self, auth_service: AuthService) -> None:
        token = await auth_service.login(ADMIN_EMAIL, "secret")
        assert token is not None

        assert await auth_service.logout(token.access_token) is True

        assert await auth_service.current_identity(token.access_token) is None
        assert (await auth_service.session(token.access_token)).authenticated is False

    @mark.asyncio
    async def test_logout_leaves_other_sessions(self, auth_service: AuthService) -> None:
        first = await auth_service.login(ADMIN_EMAIL, "secret")
        second = await auth_service.login(ADMIN_EMAIL, "secret")
        assert first is not None
        assert second is not None

        await auth_service.logout(first.access_token)

        assert await auth_service.current_identity(second.access_token) is not None

    @mark.asyncio
    async def test_logout_with_invalid_token(self, auth_service: AuthService) -> None:
        assert await auth_service.logout("garbage") is False
