"""
Database connection and pool management
"""

import asyncio
import logging
from contextlib import suppress
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import asyncpg
from fastapi import Request

from config import settings

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"

_UNAVAILABLE_ERRORS = (
    asyncio.TimeoutError,
    OSError,
    asyncpg.PostgresConnectionError,
    asyncpg.TooManyConnectionsError,
    asyncpg.CannotConnectNowError,
)


class DatabaseErrorKind(str, Enum):
    """Closed set of failure kinds surfaced by the data-access layer"""
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"
    QUERY = "query"


class DatabaseError(Exception):
    """Driver error classified at the pool boundary"""

    def __init__(self, kind: DatabaseErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


def classify_error(exc: BaseException) -> DatabaseError:
    """Translate a raw driver or network error into a DatabaseError"""
    if isinstance(exc, DatabaseError):
        return exc
    if isinstance(exc, asyncpg.UniqueViolationError):
        return DatabaseError(DatabaseErrorKind.CONFLICT, str(exc))
    if isinstance(exc, _UNAVAILABLE_ERRORS):
        message = str(exc) or "Timed out waiting for a database connection"
        return DatabaseError(DatabaseErrorKind.UNAVAILABLE, message)
    return DatabaseError(DatabaseErrorKind.QUERY, str(exc) or type(exc).__name__)


class Database:
    """Bounded asyncpg pool with explicit startup and shutdown"""

    def __init__(
        self,
        dsn: Optional[str] = None,
        *,
        min_size: int = settings.DB_POOL_MIN_SIZE,
        max_size: int = settings.DB_POOL_MAX_SIZE,
        acquire_timeout: float = settings.DB_ACQUIRE_TIMEOUT,
        command_timeout: float = settings.DB_COMMAND_TIMEOUT,
        close_timeout: float = settings.DB_CLOSE_TIMEOUT,
    ):
        self.dsn = dsn
        self.min_size = min_size
        self.max_size = max_size
        self.acquire_timeout = acquire_timeout
        self.command_timeout = command_timeout
        self.close_timeout = close_timeout
        self._pool: Optional[asyncpg.Pool] = None
        self._diagnostic_task: Optional[asyncio.Task] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.dsn)

    async def connect(self) -> None:
        """Create the pool and schedule a connectivity check without waiting on it"""
        if not self.dsn:
            logger.warning("Database not configured: DATABASE_URL is missing")
            return

        try:
            self._pool = await asyncpg.create_pool(
                self.dsn,
                min_size=self.min_size,
                max_size=self.max_size,
                command_timeout=self.command_timeout,
                statement_cache_size=0  # pgbouncer compatibility
            )
        except Exception as e:
            logger.error(f"Database pool creation failed: {e}")
            return

        self._diagnostic_task = asyncio.get_running_loop().create_task(self._check_connection())
        logger.info(f"Database pool created (max_size={self.max_size})")

    async def _check_connection(self) -> None:
        try:
            rows = await self.query("SELECT NOW() AS now")
        except DatabaseError as e:
            logger.error(f"Database connection failed: {e.message}")
            return
        logger.info(f"Database connected successfully at {rows[0]['now']}")

    async def query(self, statement: str, *params: Any) -> List[Dict[str, Any]]:
        """Run a parameterized statement on a pooled connection and return rows as dicts"""
        if self._pool is None:
            raise DatabaseError(DatabaseErrorKind.UNAVAILABLE, "Database is not configured")

        try:
            async with self._pool.acquire(timeout=self.acquire_timeout) as conn:
                records = await conn.fetch(statement, *params)
        except Exception as e:
            raise classify_error(e) from e

        return [dict(record) for record in records]

    async def execute(self, statement: str) -> str:
        """Run a parameterless statement (DDL) and return the command status"""
        if self._pool is None:
            raise DatabaseError(DatabaseErrorKind.UNAVAILABLE, "Database is not configured")

        try:
            async with self._pool.acquire(timeout=self.acquire_timeout) as conn:
                return await conn.execute(statement)
        except Exception as e:
            raise classify_error(e) from e

    async def init_schema(self) -> None:
        """Create the users table if it does not exist yet"""
        await self.execute(SCHEMA_PATH.read_text())
        logger.info("Database schema ensured")

    async def close(self) -> None:
        """Drain checked-out connections and close the pool"""
        if self._diagnostic_task is not None and not self._diagnostic_task.done():
            self._diagnostic_task.cancel()
            with suppress(asyncio.CancelledError):
                await self._diagnostic_task
        self._diagnostic_task = None

        pool, self._pool = self._pool, None
        if pool is None:
            return

        try:
            await asyncio.wait_for(pool.close(), timeout=self.close_timeout)
        except asyncio.TimeoutError:
            logger.warning("Timed out draining database connections, terminating pool")
            pool.terminate()
        logger.info("Database connections closed")


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the application's database"""
    return request.app.state.database
