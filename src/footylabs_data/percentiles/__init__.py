"""
Cohort extraction and percentile/rank scoring.
"""

from .calculator import (
    MetricDistribution,
    PercentileCalculator,
    calculate_percentile,
    calculate_rank,
    score_cohort,
)
from .config import (
    COHORT_STAT_KEYS,
    PLAYER_METRICS,
    PRIMARY_METRIC,
    Direction,
    MetricDescriptor,
    get_stat_label,
    percentile_band,
)
from .extractor import build_cohort, extract_current_season_stats

__all__ = [
    "MetricDistribution",
    "PercentileCalculator",
    "calculate_percentile",
    "calculate_rank",
    "score_cohort",
    "COHORT_STAT_KEYS",
    "PLAYER_METRICS",
    "PRIMARY_METRIC",
    "Direction",
    "MetricDescriptor",
    "get_stat_label",
    "percentile_band",
    "build_cohort",
    "extract_current_season_stats",
]
