# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Settings are read once at import time, so this must happen before the
# application package is imported anywhere
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "development"
os.environ["LOG_TO_FILE"] = "false"
os.environ["GEMINI_API_KEY"] = ""
os.environ["ADMIN_EMAIL"] = "admin@example.com"
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-entropy"

from collections.abc import AsyncGenerator, Callable
from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.pool import StaticPool

from inkpost.db import build_engine, build_session_maker, init_db
from inkpost.models import PostDB

BASE_TIME = datetime(2025, 1, 1, 10, 0, tzinfo=UTC)


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """In-memory document store shared by every session of one test."""
    engine = build_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(bind=engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    async with build_session_maker(engine)() as session:
        yield session


@pytest.fixture
def make_post() -> Callable[..., PostDB]:
    """
    Build unsaved posts with distinct, increasing creation times.

    The n-th post built is ``n`` minutes newer than the previous one, so
    newest-first ordering is deterministic.
    """
    counter = {"n": 0}

    def _make(
        title: str = "Untitled",
        content: str = "Some content",
        excerpt: str = "",
        tags: list[str] | None = None,
        image_url: str | None = None,
    ) -> PostDB:
        counter["n"] += 1
        created = BASE_TIME + timedelta(minutes=counter["n"])
        return PostDB(
            title=title,
            content=content,
            excerpt=excerpt or content[:150] + "...",
            tags=tags or [],
            image_url=image_url,
            created_at=created,
            updated_at=created,
        )

    return _make


@pytest.fixture
def add_posts(session: AsyncSession) -> Callable:
    """Persist posts and return them in insertion order."""

    async def _add(*posts: PostDB) -> list[PostDB]:
        session.add_all(posts)
        await session.commit()
        return list(posts)

    return _add
