"""
FootyLabs Data

Cohort percentile and rank scoring for football player statistics.

Players in a league/position cohort are read from the hosted player store,
their most recent season's statistics are extracted from the season-keyed
statistics blob, and every player is placed by percentile and rank on each
ranked metric.

Usage:
    from footylabs_data import PercentileService, get_postgres_db

    service = PercentileService(get_postgres_db())
    result = service.get_cohort_percentiles(league="Allsvenskan", position="M")
"""

from .pg_connection import PostgresDB, close_postgres_db, get_postgres_db
from .percentiles import (
    PercentileCalculator,
    build_cohort,
    calculate_percentile,
    calculate_rank,
    extract_current_season_stats,
    score_cohort,
)
from .services.percentiles import CohortSelectionError, DataStoreError, PercentileService

__version__ = "1.0.0"

__all__ = [
    # Connection
    "PostgresDB",
    "get_postgres_db",
    "close_postgres_db",
    # Scoring
    "PercentileCalculator",
    "build_cohort",
    "calculate_percentile",
    "calculate_rank",
    "extract_current_season_stats",
    "score_cohort",
    # Service
    "CohortSelectionError",
    "DataStoreError",
    "PercentileService",
]
