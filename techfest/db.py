"""
PostgreSQL connectivity for the techfest back end.

The API shares one thread-safe pool (sync routes run in FastAPI's thread
pool); scripts open a standalone connection instead.
"""

from __future__ import annotations

import logging
from typing import Generator

import psycopg2
import psycopg2.pool
from psycopg2.extensions import connection as _connection

from techfest.configs.settings import Settings, get_settings

logger = logging.getLogger(__name__)

_POOL: psycopg2.pool.ThreadedConnectionPool | None = None


def get_connection(settings: Settings | None = None) -> _connection:
    """Open a new connection. The caller closes it."""
    settings = settings or get_settings()
    return psycopg2.connect(**settings.get_psycopg2_params())


def get_pool(settings: Settings | None = None) -> psycopg2.pool.ThreadedConnectionPool:
    """
    Return the process-wide pool, creating it on first call.

    Parameters
    ----------
    settings : Settings, optional
        Only consulted when the pool does not exist yet.
    """
    global _POOL
    if _POOL is None:
        settings = settings or get_settings()
        _POOL = psycopg2.pool.ThreadedConnectionPool(
            minconn=settings.DB_POOL_MIN,
            maxconn=max(settings.DB_POOL_MAX, settings.DB_POOL_MIN),
            **settings.get_psycopg2_params(),
        )
        logger.info(
            f"Opened PostgreSQL pool ({settings.DB_POOL_MIN}-{settings.DB_POOL_MAX} connections)"
        )
    return _POOL


def close_pool() -> None:
    global _POOL
    if _POOL is not None:
        _POOL.closeall()
        _POOL = None
        logger.info("Closed PostgreSQL pool")


def get_db() -> Generator[_connection, None, None]:
    """FastAPI dependency lending a pooled connection for one request."""
    pool = get_pool()
    conn = pool.getconn()
    try:
        yield conn
    finally:
        pool.putconn(conn)
