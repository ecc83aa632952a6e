"""Database connection management for the pub check-in badge engine."""

import json
import logging

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import asyncpg

from asyncpg import Connection
from asyncpg import Pool

from pubcheckin_badges.config.database import get_database_settings
from pubcheckin_badges.config.database import get_database_url

logger = logging.getLogger(__name__)


async def _init_connection(connection: Connection) -> None:
    """Decode JSONB columns (earned badge metadata) to Python objects."""
    await connection.set_type_codec(
        "jsonb", encoder=json.dumps, decoder=json.loads, schema="pg_catalog"
    )


class Database:
    """Database connection manager with connection pooling."""

    def __init__(self):
        self._pool: Pool | None = None
        self._settings = get_database_settings()

    async def connect(self) -> None:
        """Initialize the database connection pool."""
        if self._pool is not None:
            logger.warning("Database pool already initialized")
            return

        database_url = get_database_url()

        try:
            self._pool = await asyncpg.create_pool(
                database_url,
                min_size=self._settings.min_pool_size,
                max_size=self._settings.max_pool_size,
                timeout=self._settings.pool_timeout,
                command_timeout=self._settings.command_timeout,
                init=_init_connection,
                server_settings={
                    "application_name": "pubcheckin-badges",
                    "timezone": "UTC",
                },
            )
            logger.info("Database connection pool initialized")

        except Exception as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise

    async def disconnect(self) -> None:
        """Close the database connection pool."""
        if self._pool is None:
            logger.warning("Database pool not initialized")
            return

        try:
            await self._pool.close()
            self._pool = None
            logger.info("Database connection pool closed")

        except Exception as e:
            logger.error(f"Error closing database pool: {e}")
            raise

    @asynccontextmanager
    async def get_connection(self) -> AsyncGenerator[Connection]:
        """Get a database connection from the pool."""
        if self._pool is None:
            raise RuntimeError("Database pool not initialized. Call connect() first.")

        async with self._pool.acquire() as connection:
            try:
                yield connection
            except Exception as e:
                logger.error(f"Database connection error: {e}")
                raise


# Global database instance
db = Database()


async def init_database() -> None:
    """Initialize the global database connection."""
    await db.connect()


async def close_database() -> None:
    """Close the global database connection."""
    await db.disconnect()


@asynccontextmanager
async def get_db_connection() -> AsyncGenerator[Connection]:
    """Get a database connection from the global pool."""
    async with db.get_connection() as connection:
        yield connection
