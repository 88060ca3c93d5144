import logging
from typing import Optional

import asyncpg

from orgchat.core.exceptions import DatastoreError
from orgchat.core.settings import settings

logger = logging.getLogger(__name__)


class PostgreSQLConnection:

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        database: str,
        min_size: int = 1,
        max_size: int = 10,
    ):
        self.pool: Optional[asyncpg.Pool] = None
        self.database = database
        self.config = {
            "host": host,
            "port": port,
            "user": user,
            "password": password,
            "database": database,
            "min_size": min_size,
            "max_size": max_size,
            # transaction-mode poolers reject server-side prepared statements
            "statement_cache_size": 0,
        }
        logger.debug(f"Chat datastore config initialized for database: {self.database}")

    async def connect(self) -> None:
        if self.pool is not None:
            logger.debug(f"Chat datastore pool already exists for: {self.database}")
            return

        try:
            logger.info(f"Connecting to chat datastore: {self.database}")
            self.pool = await asyncpg.create_pool(**self.config)
            logger.info(f"Chat datastore pool created: {self.database}")
        except (OSError, asyncpg.PostgresError) as e:
            logger.error(f"Failed to create pool for {self.database}: {e}")
            self.pool = None
            raise DatastoreError(f"Database connection failed: {e}") from e

    async def close(self) -> None:
        if self.pool is None:
            logger.debug(f"No active pool to close for: {self.database}")
            return

        logger.info(f"Closing chat datastore pool: {self.database}")
        try:
            await self.pool.close()
        finally:
            self.pool = None

    def get_connection(self) -> asyncpg.pool.PoolAcquireContext:
        if self.pool is None:
            logger.error(f"Connection pool not initialized for {self.database}")
            raise DatastoreError(
                "Database connection pool is not initialized. Call connect() first."
            )
        return self.pool.acquire()


db_connection = PostgreSQLConnection(
    host=settings.database_host,
    port=settings.database_port,
    user=settings.database_user,
    password=settings.database_password,
    database=settings.database_name,
    min_size=settings.database_pool_min_size,
    max_size=settings.database_pool_max_size,
)

