"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from inkpost.configs import file_logger, settings
from inkpost.errors.database import DatabaseInitializationError

logger = file_logger(getLogger(__name__))


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection pool events for monitoring."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("New database connection established")

    @event.listens_for(engine.sync_engine, "checkout")
    def on_checkout(
        dbapi_connection: object,
        connection_record: object,
        connection_proxy: object,
    ) -> None:
        logger.debug("Connection checked out from pool")


def build_engine(url: str, **kwargs: Any) -> AsyncEngine:
    """
    Create the async engine for the document store.

    SQLite URLs get no pool sizing; server databases get pre-ping and
    recycling so stale connections are dropped transparently.
    """
    options: dict[str, Any] = {"echo": settings.DATABASE_ECHO}
    if not url.startswith("sqlite"):
        options.update(pool_pre_ping=True, pool_recycle=1800)
    options.update(kwargs)
    return create_async_engine(url, **options)


engine: AsyncEngine = build_engine(settings.DATABASE_URL)

if settings.DEBUG:
    _configure_engine_events(engine)


def build_session_maker(bind: AsyncEngine) -> async_sessionmaker[SQLModelAsyncSession]:
    return async_sessionmaker(
        bind,
        class_=SQLModelAsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async_session_maker: async_sessionmaker[SQLModelAsyncSession] = build_session_maker(engine)


async def get_session() -> AsyncGenerator[AsyncSession]:
    """
    Dependency for getting async database sessions.

    Yields:
        AsyncSession: Database session
    """
    async with transaction() as session:
        yield session


@asynccontextmanager
async def transaction() -> AsyncGenerator[AsyncSession]:
    """
    Context manager for explicit transaction management.

    Commits on successful exit, rolls back on exception.
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception("Transaction error")
            raise


async def init_db(bind: AsyncEngine | None = None) -> None:
    """
    Create the posts table if it does not exist.

    Raises:
        DatabaseInitializationError: If the store cannot be initialized.
    """
    from inkpost.models import PostDB  # noqa: F401, PLC0415

    try:
        async with (bind or engine).begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
    except SQLAlchemyError as e:
        logger.exception("Database initialization failed")
        raise DatabaseInitializationError(detail=f"Failed to initialize database: {e}") from e
    logger.info("Database initialized successfully!")


async def ping_db() -> bool:
    """Return True when the store answers a trivial query."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError):
        logger.warning("Database ping failed", exc_info=True)
        return False
    return True


async def close_db() -> None:
    """Dispose of all pooled connections."""
    await engine.dispose()
    logger.info("Database connections closed")
