"""
Pydantic models for cohort percentile data.

These models are used for:
- Validating the season-keyed statistics blob read from the player store
- Type-safe rows from the upstream player query
- API response serialization
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Number = Union[int, float]


# =============================================================================
# Season Record (raw statistics blob)
# =============================================================================


class SeasonPayload(BaseModel):
    """One season's data for a tournament."""

    model_config = ConfigDict(extra="ignore")

    statistics: Optional[dict[str, Any]] = None


class TournamentRecord(BaseModel):
    """A tournament entry: its name and a season-id keyed mapping of payloads."""

    model_config = ConfigDict(extra="ignore")

    tournament_name: Optional[str] = None
    # Payloads are validated as SeasonPayload when a season is read
    seasons: Optional[dict[str, Any]] = None


# Source player key -> tournament entry
SeasonRecord = dict[str, TournamentRecord]


# =============================================================================
# Upstream rows
# =============================================================================


class PlayerRow(BaseModel):
    """A player row as returned by the cohort query."""

    model_config = ConfigDict(extra="ignore")

    id: int
    name: Optional[str] = None
    age: Optional[int] = None
    picture_url: Optional[str] = None
    main_position: Optional[str] = None
    position: Optional[str] = None  # classifier position
    sf_data: Optional[Any] = None
    transfermarkt_url: Optional[str] = None
    market_value_eur: Optional[Number] = None
    club_name: Optional[str] = None
    club_logo_url: Optional[str] = None
    club_transfermarkt_url: Optional[str] = None
    league_name: Optional[str] = None


# =============================================================================
# Cohort entries
# =============================================================================


class CohortEntry(BaseModel):
    """One player in a cohort with a flattened, zero-defaulted stats map."""

    id: int
    name: Optional[str] = None
    age: Optional[int] = None
    picture_url: Optional[str] = None
    position: Optional[str] = None
    club: Optional[str] = None
    club_logo: Optional[str] = None
    transfermarkt_url: Optional[str] = None
    club_transfermarkt_url: Optional[str] = None
    market_value_eur: Optional[Number] = None
    season: Optional[str] = None  # season id the stats were taken from
    stats: dict[str, Number]


class ScoredEntry(CohortEntry):
    """A cohort entry with per-metric percentiles and ranks."""

    model_config = ConfigDict(populate_by_name=True)

    percentiles: dict[str, int]
    ranks: dict[str, int]
    total_players: int = Field(serialization_alias="totalPlayers")


class PercentileResponse(BaseModel):
    """Response body for a cohort percentile request."""

    model_config = ConfigDict(populate_by_name=True)

    players: list[ScoredEntry]
    league: Optional[str] = None
    position: Optional[str] = None
    total_players: int = Field(serialization_alias="totalPlayers")
    current_player_id: Optional[int] = Field(default=None, serialization_alias="currentPlayerId")
    season: Optional[str] = None
    message: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with API field names; `season` and `message` only appear when set."""
        data = self.model_dump(by_alias=True)
        for key in ("season", "message"):
            if data[key] is None:
                del data[key]
        return data
