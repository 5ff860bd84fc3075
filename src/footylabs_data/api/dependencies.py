"""
Dependency injection for API endpoints.

Routes use the synchronous psycopg3 pool; FastAPI runs sync work in its
thread pool.
"""

from typing import Annotated

from fastapi import Depends

from ..pg_connection import PostgresDB, close_postgres_db, get_postgres_db
from ..services.percentiles import PercentileService


def get_db() -> PostgresDB:
    """
    Dependency that provides the database connection.

    Returns:
        PostgresDB instance with connection pooling
    """
    return get_postgres_db()


def close_db() -> None:
    """Close the global database connection. Called at app shutdown."""
    close_postgres_db()


DBDependency = Annotated[PostgresDB, Depends(get_db)]


def get_percentile_service(db: DBDependency) -> PercentileService:
    """Build a percentile service bound to the request's database."""
    return PercentileService(db)


PercentileServiceDependency = Annotated[PercentileService, Depends(get_percentile_service)]
