# tests/routes/conftest.py
"""Pytest configuration and fixtures for HTTP route tests."""

from collections.abc import AsyncGenerator, Generator
from unittest.mock import AsyncMock

from httpx import ASGITransport, AsyncClient
from pytest import fixture
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from inkpost.db import build_session_maker, get_session
from inkpost.dependencies import get_auth_service, get_image_service
from inkpost.main import app
from inkpost.managers.password_manager import PasswordHasher
from inkpost.managers.rate_limiter import limiter
from inkpost.managers.token_blacklist import TokenBlacklist
from inkpost.managers.token_manager import create_access_token
from inkpost.services.auth import AuthService
from inkpost.services.image import ImageService

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "secret"
IMAGE_URL = "https://res.cloudinary.com/demo/image/upload/inkpost/posts/cover.png"


@fixture(scope="session")
def admin_password_hash() -> str:
    return PasswordHasher(memory_cost=1024, time_cost=1, parallelism=1).hash(ADMIN_PASSWORD)


@fixture
def auth_service(admin_password_hash: str) -> AuthService:
    return AuthService(
        token_blacklist=TokenBlacklist(),
        admin_email=ADMIN_EMAIL,
        admin_password_hash=admin_password_hash,
    )


@fixture
def image_storage() -> AsyncMock:
    storage = AsyncMock()
    storage.upload_image.return_value = IMAGE_URL
    return storage


@fixture
def overrides(
    engine: AsyncEngine,
    auth_service: AuthService,
    image_storage: AsyncMock,
) -> Generator[None]:
    """Point the app at the in-memory store, a private auth service and a fake image host."""
    session_maker = build_session_maker(engine)

    async def _session() -> AsyncGenerator[AsyncSession]:
        async with session_maker() as session:
            yield session
            await session.commit()

    app.dependency_overrides[get_session] = _session
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_image_service] = lambda: ImageService(storage=image_storage)
    limiter.enabled = False
    yield
    app.dependency_overrides.clear()
    limiter.enabled = True


@fixture
async def client(overrides: None) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing FastAPI endpoints."""
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac


@fixture
def admin_headers() -> dict[str, str]:
    token, _ = create_access_token(ADMIN_EMAIL)
    return {"Authorization": f"Bearer {token}"}
