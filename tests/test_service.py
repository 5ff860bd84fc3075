"""
Tests for the cohort percentile service.
"""

import psycopg
import pytest

from conftest import FakeDB, make_row, make_sf_data

from footylabs_data.services.percentiles import (
    EMPTY_COHORT_MESSAGE,
    CohortSelectionError,
    DataStoreError,
    PercentileService,
)


class TestCohortPercentiles:
    def test_scores_and_sorts_cohort(self, fake_db):
        result = PercentileService(fake_db).get_cohort_percentiles("Allsvenskan", "M").to_dict()

        assert result["league"] == "Allsvenskan"
        assert result["position"] == "M"
        assert result["totalPlayers"] == 3
        assert result["currentPlayerId"] is None
        assert "message" not in result
        assert [p["id"] for p in result["players"]] == [2, 3, 1]
        assert [p["ranks"]["rating"] for p in result["players"]] == [1, 1, 3]
        assert all(p["totalPlayers"] == 3 for p in result["players"])

    def test_lower_is_better_in_response(self, fake_db):
        result = PercentileService(fake_db).get_cohort_percentiles("Allsvenskan", "M").to_dict()
        by_id = {p["id"]: p for p in result["players"]}
        # fouls 20, 11, 15
        assert by_id[2]["ranks"]["fouls"] == 1
        assert by_id[1]["ranks"]["fouls"] == 3
        assert by_id[2]["percentiles"]["fouls"] == 100

    def test_league_slug_and_position_name(self, fake_db):
        result = PercentileService(fake_db).get_cohort_percentiles("allsvenskan", "Midfielder")
        assert result.total_players == 3
        assert fake_db.calls[-1] == ("fetchall", ("Allsvenskan", "M"))

    def test_players_without_league_stats_excluded(self, cohort_rows):
        cohort_rows.append(make_row(4, "Cup Only", tournament="Svenska Cupen"))
        db = FakeDB(cohort_rows)
        result = PercentileService(db).get_cohort_percentiles("Allsvenskan", "M")
        assert result.total_players == 3
        assert 4 not in [p.id for p in result.players]

    def test_league_alias_tournament(self):
        db = FakeDB(
            [
                make_row(1, "A", rating=7.2, league="OBOS-ligaen", tournament="1. Division"),
                make_row(2, "B", rating=6.8, league="OBOS-ligaen", tournament="OBOS-ligaen"),
            ]
        )
        result = PercentileService(db).get_cohort_percentiles("OBOS-ligaen", "M")
        assert [p.id for p in result.players] == [1, 2]

    def test_empty_cohort(self, fake_db):
        result = PercentileService(fake_db).get_cohort_percentiles("Eliteserien", "G").to_dict()
        assert result["players"] == []
        assert result["totalPlayers"] == 0
        assert result["message"] == EMPTY_COHORT_MESSAGE

    def test_repeated_calls_identical(self, fake_db):
        service = PercentileService(fake_db)
        first = service.get_cohort_percentiles("Allsvenskan", "M").to_dict()
        second = service.get_cohort_percentiles("Allsvenskan", "M").to_dict()
        assert first == second


class TestSeasonSelection:
    @pytest.fixture
    def two_season_db(self, cohort_rows):
        sf_data = make_sf_data("Allsvenskan", {"40000": {"rating": 9.1}, "52540": {"rating": 6.0}})
        cohort_rows.append(make_row(5, "Two Seasons", sf_data=sf_data))
        return FakeDB(cohort_rows)

    def test_pinned_season(self, two_season_db):
        result = PercentileService(two_season_db).get_cohort_percentiles(
            "Allsvenskan", "M", season="40000"
        )
        assert result.season == "40000"
        assert [(p.id, p.season, p.stats["rating"]) for p in result.players] == [(5, "40000", 9.1)]
        assert result.to_dict()["season"] == "40000"

    def test_latest_season_when_not_pinned(self, two_season_db):
        result = PercentileService(two_season_db).get_cohort_percentiles("Allsvenskan", "M")
        assert result.season is None
        assert result.total_players == 4
        by_id = {p.id: p for p in result.players}
        assert by_id[5].season == "52540"
        assert by_id[5].stats["rating"] == 6.0
        assert "season" not in result.to_dict()

    def test_blank_season_means_latest(self, two_season_db):
        result = PercentileService(two_season_db).get_cohort_percentiles(
            "Allsvenskan", "M", season="  "
        )
        assert result.season is None
        assert result.total_players == 4

    def test_season_nobody_has(self, two_season_db):
        result = PercentileService(two_season_db).get_cohort_percentiles(
            "Allsvenskan", "M", season="1"
        ).to_dict()
        assert result["players"] == []
        assert result["season"] == "1"
        assert result["message"] == EMPTY_COHORT_MESSAGE


class TestSelectionErrors:
    def test_missing_league(self, fake_db):
        with pytest.raises(CohortSelectionError) as exc_info:
            PercentileService(fake_db).get_cohort_percentiles(None, "M")
        assert exc_info.value.league is None
        assert exc_info.value.position == "M"
        assert fake_db.calls == []

    def test_missing_position(self, fake_db):
        with pytest.raises(CohortSelectionError):
            PercentileService(fake_db).get_cohort_percentiles("Allsvenskan", "  ")

    def test_unknown_league(self, fake_db):
        with pytest.raises(CohortSelectionError, match="Unknown league"):
            PercentileService(fake_db).get_cohort_percentiles("Premier League", "M")

    def test_unknown_player_cannot_supply_defaults(self, fake_db):
        with pytest.raises(CohortSelectionError):
            PercentileService(fake_db).get_cohort_percentiles(player_id=999)


class TestProfileDetection:
    def test_league_and_position_from_profile(self, fake_db):
        result = PercentileService(fake_db).get_cohort_percentiles(player_id=3)
        assert result.league == "Allsvenskan"
        assert result.position == "M"
        assert result.current_player_id == 3
        assert result.total_players == 3

    def test_explicit_values_override_profile(self, fake_db):
        result = PercentileService(fake_db).get_cohort_percentiles(
            league="Eliteserien", player_id=3
        )
        assert result.league == "Eliteserien"
        assert result.position == "M"
        assert result.current_player_id == 3

    def test_falls_back_to_latest_tournament(self, cohort_rows):
        sf_data = make_sf_data("Superettan", {"40000": {"rating": 6.5}}, key="a")
        sf_data.update(make_sf_data("Allsvenskan", {"52540": {"rating": 7.1}}, key="b"))
        cohort_rows.append(
            make_row(10, "New Signing", league="Damallsvenskan", position="M", sf_data=sf_data)
        )
        db = FakeDB(cohort_rows)

        result = PercentileService(db).get_cohort_percentiles(player_id=10)
        assert result.league == "Allsvenskan"
        assert result.current_player_id == 10


class TestDataStoreErrors:
    def test_wraps_database_errors(self):
        db = FakeDB(error=psycopg.OperationalError("connection refused"))
        with pytest.raises(DataStoreError) as exc_info:
            PercentileService(db).get_cohort_percentiles("Allsvenskan", "M")
        assert exc_info.value.message == "Failed to fetch players"
        assert "connection refused" in exc_info.value.details

    def test_profile_lookup_errors_propagate(self):
        db = FakeDB(error=psycopg.OperationalError("timeout"))
        with pytest.raises(DataStoreError):
            PercentileService(db).get_cohort_percentiles(player_id=1)


class TestCatalogue:
    def test_metric_catalogue(self, fake_db):
        catalogue = PercentileService(fake_db).get_metric_catalogue()
        assert catalogue["primaryMetric"] == "rating"
        assert len(catalogue["metrics"]) == 18
        fouls = next(m for m in catalogue["metrics"] if m["key"] == "fouls")
        assert fouls == {"key": "fouls", "label": "Fouls", "higherIsBetter": False}

    def test_leagues(self):
        leagues = PercentileService.get_leagues()
        obos = next(lg for lg in leagues if lg["id"] == "obos-ligaen")
        assert obos["tournamentNames"] == ["OBOS-ligaen", "1. Division"]
