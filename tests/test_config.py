"""
Tests for metric configuration, league registry and position codes.
"""

import pytest

from footylabs_data.core.types import (
    LEAGUE_REGISTRY,
    find_league_for_tournament,
    get_league_config,
    normalize_position,
)
from footylabs_data.percentiles.config import (
    COHORT_STAT_KEYS,
    PLAYER_METRICS,
    PRIMARY_METRIC,
    Direction,
    get_metric,
    get_stat_label,
    percentile_band,
)


class TestMetricDescriptors:
    def test_keys_are_unique(self):
        keys = [m.key for m in PLAYER_METRICS]
        assert len(keys) == len(set(keys)) == 18

    def test_lower_is_better_metrics(self):
        lower = {m.key for m in PLAYER_METRICS if m.direction is Direction.LOWER_IS_BETTER}
        assert lower == {"yellowCards", "redCards", "fouls"}

    def test_primary_metric_is_ranked(self):
        assert get_metric(PRIMARY_METRIC).higher_is_better

    def test_cohort_keys_unique(self):
        assert len(COHORT_STAT_KEYS) == len(set(COHORT_STAT_KEYS)) == 22

    def test_unknown_metric(self):
        with pytest.raises(KeyError):
            get_metric("expectedGoals")


class TestStatLabels:
    def test_known_label(self):
        assert get_stat_label("rating") == "FootyLabs Score"
        assert get_stat_label("accuratePassesPercentage") == "Pass Accuracy"

    def test_fallback_splits_camel_case(self):
        assert get_stat_label("wasFouled") == "Was Fouled"
        assert get_stat_label("totalCross") == "Total Cross"


class TestPercentileBands:
    @pytest.mark.parametrize(
        "percentile,band",
        [
            (100, "elite"),
            (80, "elite"),
            (79, "good"),
            (60, "good"),
            (45, "average"),
            (20, "below_average"),
            (19, "poor"),
            (0, "poor"),
        ],
    )
    def test_bands(self, percentile, band):
        assert percentile_band(percentile) == band


class TestLeagueRegistry:
    def test_lookup_by_slug_and_name(self):
        assert get_league_config("obos-ligaen").name == "OBOS-ligaen"
        assert get_league_config("OBOS-ligaen").id == "obos-ligaen"
        assert get_league_config("  allsvenskan ").name == "Allsvenskan"
        assert get_league_config("Ykkösliiga").id == "ykkosliiga"

    def test_unknown_league(self):
        with pytest.raises(KeyError):
            get_league_config("Premier League")

    def test_tournament_names_start_with_league_name(self):
        for cfg in LEAGUE_REGISTRY.values():
            assert cfg.tournament_names[0] == cfg.name

    def test_find_league_for_tournament(self):
        assert find_league_for_tournament("Ykkönen").id == "ykkosliiga"
        assert find_league_for_tournament("Svenska Cupen") is None
        assert find_league_for_tournament(None) is None


class TestNormalizePosition:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("M", "M"),
            ("m", "M"),
            ("Goalkeeper", "G"),
            ("forward", "F"),
            (" D ", "D"),
            ("Wing-back", "Wing-back"),
            ("", None),
            ("   ", None),
            (None, None),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_position(raw) == expected
