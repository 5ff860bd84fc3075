"""
Configuration for percentile calculations.

Defines which statistics are read into a cohort, which of them are
ranked, and in which direction each one counts as better.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(str, Enum):
    """Whether larger or smaller raw values are better."""

    HIGHER_IS_BETTER = "higher"
    LOWER_IS_BETTER = "lower"


@dataclass(frozen=True)
class MetricDescriptor:
    """A ranked statistic and the direction it is scored in."""

    key: str
    label: str
    direction: Direction = Direction.HIGHER_IS_BETTER

    @property
    def higher_is_better(self) -> bool:
        return self.direction is Direction.HIGHER_IS_BETTER


# Statistics copied from the current season into every cohort entry.
# Missing values default to 0.
COHORT_STAT_KEYS: tuple[str, ...] = (
    "rating",
    "goals",
    "assists",
    "appearances",
    "minutesPlayed",
    "matchesStarted",
    "accuratePassesPercentage",
    "totalDuelsWonPercentage",
    "successfulDribblesPercentage",
    "aerialDuelsWonPercentage",
    "ballRecovery",
    "keyPasses",
    "shotsOnTarget",
    "totalShots",
    "goalConversionPercentage",
    "clearances",
    "totalCross",
    "accurateCrossesPercentage",
    "yellowCards",
    "redCards",
    "fouls",
    "wasFouled",
)

_LOWER = Direction.LOWER_IS_BETTER

# Stats ranked within a cohort. Order is the order of the output mappings.
PLAYER_METRICS: tuple[MetricDescriptor, ...] = (
    MetricDescriptor("rating", "FootyLabs Score"),
    MetricDescriptor("goals", "Goals"),
    MetricDescriptor("assists", "Assists"),
    MetricDescriptor("appearances", "Appearances"),
    MetricDescriptor("minutesPlayed", "Minutes Played"),
    MetricDescriptor("accuratePassesPercentage", "Pass Accuracy"),
    MetricDescriptor("totalDuelsWonPercentage", "Duels Won"),
    MetricDescriptor("successfulDribblesPercentage", "Dribbles Success"),
    MetricDescriptor("aerialDuelsWonPercentage", "Aerial Duels"),
    MetricDescriptor("ballRecovery", "Ball Recoveries"),
    MetricDescriptor("keyPasses", "Key Passes"),
    MetricDescriptor("shotsOnTarget", "Shots on Target"),
    MetricDescriptor("goalConversionPercentage", "Goal Conversion"),
    MetricDescriptor("clearances", "Clearances"),
    MetricDescriptor("accurateCrossesPercentage", "Crossing Accuracy"),
    MetricDescriptor("yellowCards", "Yellow Cards", _LOWER),
    MetricDescriptor("redCards", "Red Cards", _LOWER),
    MetricDescriptor("fouls", "Fouls", _LOWER),
)

# Scored cohorts are ordered by this metric, best first
PRIMARY_METRIC = "rating"

# Lower bounds for percentile bands, best first
PERCENTILE_BANDS: tuple[tuple[int, str], ...] = (
    (80, "elite"),
    (60, "good"),
    (40, "average"),
    (20, "below_average"),
    (0, "poor"),
)


def get_metric(key: str) -> MetricDescriptor:
    """
    Look up a metric descriptor by key.

    Raises:
        KeyError: If the key is not a ranked metric
    """
    for metric in PLAYER_METRICS:
        if metric.key == key:
            return metric
    raise KeyError(key)


def get_stat_label(stat_key: str) -> str:
    """
    Get the display label for a stat key.

    Falls back to splitting the camelCase key into Title Case words.
    """
    try:
        return get_metric(stat_key).label
    except KeyError:
        pass

    words: list[str] = []
    current = ""
    for ch in stat_key:
        if ch.isupper() and current:
            words.append(current)
            current = ch
        else:
            current += ch
    if current:
        words.append(current)
    return " ".join(w.capitalize() for w in words)


def percentile_band(percentile: float) -> str:
    """Map a percentile to its band name."""
    for threshold, band in PERCENTILE_BANDS:
        if percentile >= threshold:
            return band
    return PERCENTILE_BANDS[-1][1]
