"""
Async database access helpers (raw SQL) using asyncpg.

The pool is created once in the FastAPI lifespan (see `api/main.py`) and kept
on the application context, not in a module global.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import asyncpg

from .errors import PoolError
from .settings import PoolSettings

logger = logging.getLogger(__name__)


async def create_pool(settings: PoolSettings) -> asyncpg.Pool:
    pool = await asyncpg.create_pool(
        dsn=settings.dsn,
        min_size=settings.min_size,
        max_size=settings.max_size,
        command_timeout=settings.command_timeout_s,
    )
    logger.info("db_pool_ready min_size=%s max_size=%s", settings.min_size, settings.max_size)
    return pool


async def close_pool(pool: asyncpg.Pool | None) -> None:
    if pool is None:
        return None
    await pool.close()
    logger.info("db_pool_closed")


@asynccontextmanager
async def acquire(pool: asyncpg.Pool, *, timeout: float | None = None) -> AsyncIterator[Any]:
    """
    Check out one connection and give it back on scope exit.

    Only the checkout itself is translated into `PoolError`; errors raised by
    the caller inside the block propagate unchanged.
    """
    try:
        conn = await pool.acquire(timeout=timeout)
    except asyncio.TimeoutError as exc:
        raise PoolError(f"Timed out waiting for a connection after {timeout}s.") from exc
    except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as exc:
        raise PoolError(f"Could not acquire a connection: {exc}") from exc

    try:
        yield conn
    finally:
        await pool.release(conn)
