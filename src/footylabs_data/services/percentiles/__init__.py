"""
Percentiles Service for FootyLabs Data.

Scores league/position cohorts by per-metric percentile and rank.

Usage:
    from footylabs_data.services.percentiles import PercentileService

    service = PercentileService(db)
    result = service.get_cohort_percentiles(league="Allsvenskan", position="M")
"""

from .service import (
    EMPTY_COHORT_MESSAGE,
    CohortSelectionError,
    DataStoreError,
    PercentileService,
)

__all__ = [
    "EMPTY_COHORT_MESSAGE",
    "CohortSelectionError",
    "DataStoreError",
    "PercentileService",
]
