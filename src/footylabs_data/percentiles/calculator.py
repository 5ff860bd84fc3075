"""
Cohort percentile and rank calculator.

Methodology:
- Percentile: position of the first value >= the target in the ascending
  sort, as a share of the cohort (0-100, rounded half up). Lower-is-better
  metrics are inverted as 100 - percentile.
- Rank: 1 + index of the first value equal to the target, sorting best
  first. Tied values share the rank of the first occurrence.

Both tie policies are kept as-is so results match existing consumers.
Each metric's values are sorted once per cohort and shared by all entries.
"""

from __future__ import annotations

import logging
import math
from bisect import bisect_left
from collections.abc import Sequence
from typing import Optional

from ..core.models import CohortEntry, Number, ScoredEntry
from .config import PLAYER_METRICS, PRIMARY_METRIC, MetricDescriptor

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_percentile(
    value: Number,
    all_values: Sequence[Number],
    higher_is_better: bool = True,
) -> int:
    """
    Percentile of a value within a distribution.

    Args:
        value: The value to place
        all_values: All values in the cohort (the value itself included)
        higher_is_better: False for stats where lower is better (e.g. fouls)

    Returns:
        Integer percentile in [0, 100]
    """
    return MetricDistribution(all_values, higher_is_better).percentile(value)


def calculate_rank(
    value: Number,
    all_values: Sequence[Number],
    higher_is_better: bool = True,
) -> int:
    """
    Rank of a value within a distribution (1 = best).

    Returns 0 if the value does not occur in `all_values`.
    """
    return MetricDistribution(all_values, higher_is_better).rank(value)


class MetricDistribution:
    """One metric's values across a cohort, sorted once for repeated lookups."""

    def __init__(self, values: Sequence[Number], higher_is_better: bool = True):
        self.higher_is_better = higher_is_better
        self.size = len(values)
        self._ascending = sorted(values)

        ordered = reversed(self._ascending) if higher_is_better else self._ascending
        self._first_index: dict[Number, int] = {}
        for i, v in enumerate(ordered):
            self._first_index.setdefault(v, i)

    def percentile(self, value: Number) -> int:
        index = bisect_left(self._ascending, value)
        if index == self.size:
            return 100 if self.higher_is_better else 0

        percentile = _round_half_up(index / self.size * 100)
        return percentile if self.higher_is_better else 100 - percentile

    def rank(self, value: Number) -> int:
        index = self._first_index.get(value)
        return 0 if index is None else index + 1


class PercentileCalculator:
    """
    Scores a cohort against a fixed list of metric descriptors.

    The calculator holds no state between calls; scoring the same cohort
    twice yields identical output.
    """

    def __init__(
        self,
        metrics: Sequence[MetricDescriptor] = PLAYER_METRICS,
        primary_metric: Optional[str] = PRIMARY_METRIC,
    ):
        self.metrics = tuple(metrics)
        self.primary_metric = primary_metric

    def distributions(self, cohort: Sequence[CohortEntry]) -> dict[str, MetricDistribution]:
        """Build one sorted distribution per metric."""
        return {
            metric.key: MetricDistribution(
                [entry.stats[metric.key] for entry in cohort],
                metric.higher_is_better,
            )
            for metric in self.metrics
        }

    def score(self, cohort: Sequence[CohortEntry]) -> list[ScoredEntry]:
        """
        Compute percentiles and ranks for every entry, best first by the primary metric.

        Args:
            cohort: Entries sharing the same stats keys; values already defaulted

        Returns:
            Scored entries. Empty when the cohort is empty.
        """
        if not cohort:
            return []

        distributions = self.distributions(cohort)
        total = len(cohort)

        scored: list[ScoredEntry] = []
        for entry in cohort:
            percentiles: dict[str, int] = {}
            ranks: dict[str, int] = {}
            for key, dist in distributions.items():
                value = entry.stats[key]
                percentiles[key] = dist.percentile(value)
                ranks[key] = dist.rank(value)

            scored.append(
                ScoredEntry(
                    **entry.model_dump(),
                    percentiles=percentiles,
                    ranks=ranks,
                    total_players=total,
                )
            )

        if self.primary_metric:
            # sorted() is stable, so ties keep cohort order
            scored = sorted(scored, key=lambda e: e.stats[self.primary_metric], reverse=True)

        logger.debug("Scored %d entries across %d metrics", total, len(self.metrics))
        return scored


def score_cohort(
    cohort: Sequence[CohortEntry],
    metrics: Sequence[MetricDescriptor] = PLAYER_METRICS,
    primary_metric: Optional[str] = PRIMARY_METRIC,
) -> list[ScoredEntry]:
    """Score a cohort with a one-off calculator."""
    return PercentileCalculator(metrics, primary_metric).score(cohort)
