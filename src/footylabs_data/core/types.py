"""
Core types and constants for FootyLabs Data.

This module provides:
- Position enum and position name lookups
- LeagueConfig dataclass for league-specific settings
- LEAGUE_REGISTRY for centralized league configuration
- Table name constants for the upstream player store
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Position(str, Enum):
    """Position codes produced by the upstream position classifier."""

    G = "G"
    D = "D"
    M = "M"
    F = "F"


POSITION_NAMES: dict[str, str] = {
    Position.G.value: "Goalkeeper",
    Position.D.value: "Defender",
    Position.M.value: "Midfielder",
    Position.F.value: "Forward",
}

_POSITION_CODES_BY_NAME = {name.lower(): code for code, name in POSITION_NAMES.items()}


def normalize_position(position: Optional[str]) -> Optional[str]:
    """
    Normalize a position to its classifier code.

    Accepts a code ("M") or a full name ("midfielder") and returns the code.
    Any other non-empty value is passed through unchanged; empty input yields None.
    """
    if position is None:
        return None
    value = position.strip()
    if not value:
        return None
    if value.upper() in POSITION_NAMES:
        return value.upper()
    return _POSITION_CODES_BY_NAME.get(value.lower(), value)


@dataclass(frozen=True)
class LeagueConfig:
    """
    Configuration for a league.

    `tournament_names` lists the names the league appears under in the
    season-keyed statistics, in lookup order.
    """

    id: str
    name: str
    country: str
    tournament_names: tuple[str, ...]
    tier: int = 1


# =============================================================================
# LEAGUE REGISTRY - Central configuration for all supported leagues
# =============================================================================

LEAGUE_REGISTRY: dict[str, LeagueConfig] = {
    "allsvenskan": LeagueConfig(
        id="allsvenskan",
        name="Allsvenskan",
        country="Sweden",
        tournament_names=("Allsvenskan",),
    ),
    "superettan": LeagueConfig(
        id="superettan",
        name="Superettan",
        country="Sweden",
        tournament_names=("Superettan",),
        tier=2,
    ),
    "eliteserien": LeagueConfig(
        id="eliteserien",
        name="Eliteserien",
        country="Norway",
        tournament_names=("Eliteserien",),
    ),
    "obos-ligaen": LeagueConfig(
        id="obos-ligaen",
        name="OBOS-ligaen",
        country="Norway",
        # Renamed from "1. Division"; older seasons still use the old name
        tournament_names=("OBOS-ligaen", "1. Division"),
        tier=2,
    ),
    "veikkausliiga": LeagueConfig(
        id="veikkausliiga",
        name="Veikkausliiga",
        country="Finland",
        tournament_names=("Veikkausliiga",),
    ),
    "ykkosliiga": LeagueConfig(
        id="ykkosliiga",
        name="Ykkösliiga",
        country="Finland",
        tournament_names=("Ykkösliiga", "Ykkönen"),
        tier=2,
    ),
    "virsliga": LeagueConfig(
        id="virsliga",
        name="Virsliga",
        country="Latvia",
        tournament_names=("Virsliga",),
    ),
}

_LEAGUES_BY_NAME = {cfg.name.lower(): cfg for cfg in LEAGUE_REGISTRY.values()}


def get_league_config(league: str) -> LeagueConfig:
    """
    Get configuration for a league.

    Args:
        league: League slug ("obos-ligaen") or display name ("OBOS-ligaen"),
            case-insensitive

    Returns:
        LeagueConfig for the requested league

    Raises:
        KeyError: If league is not in registry
    """
    key = league.strip().lower()
    if key in LEAGUE_REGISTRY:
        return LEAGUE_REGISTRY[key]
    return _LEAGUES_BY_NAME[key]


def find_league_for_tournament(tournament_name: Optional[str]) -> Optional[LeagueConfig]:
    """Return the registered league a tournament name belongs to, if any."""
    if not tournament_name:
        return None
    for cfg in LEAGUE_REGISTRY.values():
        if tournament_name in cfg.tournament_names:
            return cfg
    return None


# =============================================================================
# Upstream table names
# =============================================================================

PLAYERS_TABLE = "players_transfermarkt"
CLUBS_TABLE = "clubs_transfermarkt"
LEAGUES_TABLE = "leagues_transfermarkt"
POSITIONS_TABLE = "sofascore_players_staging"
PLAYER_PROFILES_TABLE = "player_profiles"
