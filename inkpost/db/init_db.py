"""
Database initialization script.

Creates the posts table if it does not exist. Run it once before the
first start, or let the application lifespan do it:

    python -m inkpost.db.init_db
"""

from asyncio import run as asyncio_run
from logging import getLogger

from inkpost.configs import file_logger
from inkpost.db.database import close_db, init_db
from inkpost.monitoring import configure_logging

logger = file_logger(getLogger(__name__))


async def main() -> None:
    """Create tables and release the connection pool."""
    configure_logging()
    logger.info("Initializing database...")
    try:
        await init_db()
    finally:
        await close_db()
    logger.info("Database ready!")


if __name__ == "__main__":
    asyncio_run(main())
