"""
Service layer for FootyLabs Data.
"""

from .percentiles import CohortSelectionError, DataStoreError, PercentileService

__all__ = ["CohortSelectionError", "DataStoreError", "PercentileService"]
