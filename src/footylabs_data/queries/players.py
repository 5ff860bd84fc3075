"""
Player queries against the hosted player store.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from psycopg import sql

from ..core.models import PlayerRow
from ..core.types import CLUBS_TABLE, LEAGUES_TABLE, PLAYERS_TABLE, POSITIONS_TABLE

if TYPE_CHECKING:
    from ..pg_connection import PostgresDB

logger = logging.getLogger(__name__)


_PLAYER_COLUMNS = sql.SQL(
    """
    p.id,
    p.name,
    p.age,
    p.picture_url,
    p.main_position,
    p.sf_data,
    p.transfermarkt_url,
    p.market_value_eur,
    c.name AS club_name,
    c.logo_url AS club_logo_url,
    c.transfermarkt_url AS club_transfermarkt_url,
    l.name AS league_name,
    s.position AS position
    """
)

_PLAYER_JOINS = sql.SQL(
    """
    FROM {players} p
    LEFT JOIN {clubs} c ON c.id = p.club_id
    LEFT JOIN {leagues} l ON l.id = c.league_id
    LEFT JOIN {positions} s ON s.id = p.sofascore_id
    """
).format(
    players=sql.Identifier(PLAYERS_TABLE),
    clubs=sql.Identifier(CLUBS_TABLE),
    leagues=sql.Identifier(LEAGUES_TABLE),
    positions=sql.Identifier(POSITIONS_TABLE),
)


class PlayerQueries:
    """Query utilities for player rows and their statistics blobs."""

    def __init__(self, db: "PostgresDB"):
        self.db = db

    def get_cohort_rows(self, league_name: str, position: str) -> list[PlayerRow]:
        """
        Fetch every player with statistics in a league and position.

        Args:
            league_name: League display name as stored on clubs
            position: Classifier position code

        Returns:
            Player rows ordered by player ID
        """
        query = sql.SQL(
            """
            SELECT {columns}
            {joins}
            WHERE p.sf_data IS NOT NULL
              AND p.sofascore_id IS NOT NULL
              AND l.name = %s
              AND s.position = %s
            ORDER BY p.id
            """
        ).format(columns=_PLAYER_COLUMNS, joins=_PLAYER_JOINS)

        rows = self.db.fetchall(query, (league_name, position))
        logger.debug("Fetched %d rows for league=%s position=%s", len(rows), league_name, position)
        return [PlayerRow.model_validate(row) for row in rows]

    def get_player(self, player_id: int) -> Optional[PlayerRow]:
        """Fetch a single player's row, used to auto-detect league and position."""
        query = sql.SQL(
            """
            SELECT {columns}
            {joins}
            WHERE p.id = %s
            """
        ).format(columns=_PLAYER_COLUMNS, joins=_PLAYER_JOINS)

        row: Optional[dict[str, Any]] = self.db.fetchone(query, (player_id,))
        return PlayerRow.model_validate(row) if row else None
