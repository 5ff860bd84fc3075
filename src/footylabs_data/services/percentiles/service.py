"""
Percentile Service implementation.

Runs the per-request pipeline: resolve league and position, fetch the
cohort from the player store, extract current-season stats, then score.
"""

import logging
from typing import TYPE_CHECKING, Any, Optional

import psycopg

from ...core.models import PercentileResponse, PlayerRow
from ...core.types import (
    LEAGUE_REGISTRY,
    LeagueConfig,
    find_league_for_tournament,
    get_league_config,
    normalize_position,
)
from ...percentiles.calculator import PercentileCalculator
from ...percentiles.extractor import build_cohort, latest_tournament, parse_season_record
from ...queries.players import PlayerQueries

if TYPE_CHECKING:
    from ...pg_connection import PostgresDB

logger = logging.getLogger(__name__)

EMPTY_COHORT_MESSAGE = "No players found with stats for this league/position combination"


class CohortSelectionError(ValueError):
    """League or position missing, or league not recognized."""

    def __init__(self, message: str, league: Optional[str], position: Optional[str]):
        super().__init__(message)
        self.message = message
        self.league = league
        self.position = position


class DataStoreError(RuntimeError):
    """Reading from the player store failed."""

    def __init__(self, message: str, details: str):
        super().__init__(message)
        self.message = message
        self.details = details


class PercentileService:
    """
    Cohort percentile service.

    Holds no per-request state; every call builds its cohort from scratch.
    """

    def __init__(self, db: "PostgresDB", calculator: Optional[PercentileCalculator] = None):
        """
        Initialize percentile service.

        Args:
            db: Database connection exposing fetchone/fetchall
            calculator: Scorer to use (defaults to the player metric list)
        """
        self._queries = PlayerQueries(db)
        self._calculator = calculator or PercentileCalculator()

    def get_cohort_percentiles(
        self,
        league: Optional[str] = None,
        position: Optional[str] = None,
        player_id: Optional[int] = None,
        season: Optional[str] = None,
    ) -> PercentileResponse:
        """
        Score every player in a league/position cohort.

        Args:
            league: League slug or name; detected from the player when omitted
            position: Position code or name; detected from the player when omitted
            player_id: Player whose profile supplies missing league/position
            season: Season id to score every player on; defaults to each
                player's latest season in the league

        Returns:
            PercentileResponse, with an explanatory message if the cohort is empty

        Raises:
            CohortSelectionError: League/position undetermined or unknown
            DataStoreError: The player store could not be read
        """
        current_player_id: Optional[int] = None

        if player_id is not None:
            profile = self._read(lambda: self._queries.get_player(player_id))
            if profile is not None:
                current_player_id = profile.id
                position = position or profile.position
                league = league or self._detect_league(profile)

        position = normalize_position(position)
        league = league.strip() if league and league.strip() else None
        season = season.strip() if season and season.strip() else None

        if not league or not position:
            raise CohortSelectionError("League and position are required", league, position)

        try:
            league_cfg = get_league_config(league)
        except KeyError:
            raise CohortSelectionError(f"Unknown league: {league}", league, position) from None

        rows = self._read(lambda: self._queries.get_cohort_rows(league_cfg.name, position))
        cohort = build_cohort(rows, league_cfg.tournament_names, season_id=season)

        logger.info(
            "Found %d players with position %s in %s season %s (%d rows fetched)",
            len(cohort),
            position,
            league_cfg.name,
            season or "latest",
            len(rows),
        )

        if not cohort:
            return PercentileResponse(
                players=[],
                league=league_cfg.name,
                position=position,
                total_players=0,
                current_player_id=current_player_id,
                season=season,
                message=EMPTY_COHORT_MESSAGE,
            )

        players = self._calculator.score(cohort)
        return PercentileResponse(
            players=players,
            league=league_cfg.name,
            position=position,
            total_players=len(players),
            current_player_id=current_player_id,
            season=season,
        )

    def _detect_league(self, profile: PlayerRow) -> Optional[str]:
        """
        League for a player: their club's league if registered, otherwise the
        registered league of the tournament holding their latest season.
        """
        if profile.league_name:
            try:
                return get_league_config(profile.league_name).name
            except KeyError:
                logger.debug("Club league %s is not registered", profile.league_name)

        tournament = latest_tournament(parse_season_record(profile.sf_data))
        league_cfg = find_league_for_tournament(tournament)
        return league_cfg.name if league_cfg else None

    def _read(self, fetch):
        try:
            return fetch()
        except psycopg.Error as e:
            logger.error("Error fetching players: %s", e, exc_info=True)
            raise DataStoreError("Failed to fetch players", str(e)) from e

    def get_metric_catalogue(self) -> dict[str, Any]:
        """Ranked metrics with labels and direction."""
        return {
            "primaryMetric": self._calculator.primary_metric,
            "metrics": [
                {
                    "key": metric.key,
                    "label": metric.label,
                    "higherIsBetter": metric.higher_is_better,
                }
                for metric in self._calculator.metrics
            ],
        }

    @staticmethod
    def get_leagues() -> list[dict[str, Any]]:
        """Registered leagues."""
        return [_league_dict(cfg) for cfg in LEAGUE_REGISTRY.values()]


def _league_dict(cfg: LeagueConfig) -> dict[str, Any]:
    return {
        "id": cfg.id,
        "name": cfg.name,
        "country": cfg.country,
        "tier": cfg.tier,
        "tournamentNames": list(cfg.tournament_names),
    }
