"""
PostgreSQL connection manager for the hosted player store.

Read-only access via psycopg3 with connection pooling.
"""

from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import psycopg
from psycopg.rows import dict_row
from psycopg_pool import ConnectionPool

from .core.config import get_settings


class PostgresDB:
    """
    PostgreSQL database connection manager.

    The pool is created closed; call `open()` (done at API startup) or let
    the first query open it.
    """

    def __init__(
        self,
        connection_string: Optional[str] = None,
        min_pool_size: int = 1,
        max_pool_size: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the PostgreSQL connection manager.

        Args:
            connection_string: PostgreSQL connection URL. Defaults to settings, then DATABASE_URL.
            min_pool_size: Minimum connections to keep in pool.
            max_pool_size: Maximum connections in pool. Defaults to settings.database_pool_size.
            timeout: Seconds to wait for a pooled connection. Defaults to settings.database_pool_timeout.
        """
        settings = get_settings()
        self.connection_string = (
            connection_string or settings.db_url or os.environ.get("DATABASE_URL")
        )
        if not self.connection_string:
            raise ValueError(
                "DATABASE_URL environment variable required or connection_string must be provided"
            )

        self._max_pool_size = max_pool_size or settings.database_pool_size
        self._min_pool_size = min(min_pool_size, self._max_pool_size)
        self._timeout = timeout or settings.database_pool_timeout

        self._pool = ConnectionPool(
            self.connection_string,
            min_size=self._min_pool_size,
            max_size=self._max_pool_size,
            timeout=self._timeout,
            kwargs={"row_factory": dict_row},
            open=False,
        )
        self._opened = False

    def open(self) -> None:
        """Open the pool and establish min_size connections."""
        if not self._opened:
            self._pool.open()
            self._opened = True

    @contextmanager
    def get_connection(self) -> Iterator[psycopg.Connection]:
        """Get a connection from the pool."""
        self.open()
        with self._pool.connection() as conn:
            yield conn

    def fetchone(self, query: Any, params: tuple = ()) -> Optional[dict[str, Any]]:
        """Execute a query and fetch one result as a dict."""
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                row = cur.fetchone()
                return dict(row) if row else None

    def fetchall(self, query: Any, params: tuple = ()) -> list[dict[str, Any]]:
        """Execute a query and fetch all results as dicts."""
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(query, params)
                return [dict(row) for row in cur.fetchall()]

    def close(self) -> None:
        """Close the connection pool."""
        if self._opened:
            self._pool.close()
            self._opened = False


# Global instance
_postgres_db: Optional[PostgresDB] = None


def get_postgres_db() -> PostgresDB:
    """
    Get the global PostgreSQL database instance.

    Returns:
        PostgresDB instance with connection pooling
    """
    global _postgres_db

    if _postgres_db is None:
        _postgres_db = PostgresDB()

    return _postgres_db


def close_postgres_db() -> None:
    """Close the global PostgreSQL database connection."""
    global _postgres_db
    if _postgres_db is not None:
        _postgres_db.close()
        _postgres_db = None
