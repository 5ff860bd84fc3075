"""
Percentiles router - cohort percentiles and ranks for the comparison views.

Endpoints:
- GET / - Score every player in a league/position cohort
- GET /metrics - Ranked metrics with labels and direction
- GET /leagues - Supported leagues
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Query

from ..dependencies import PercentileServiceDependency

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=None)
def get_cohort_percentiles(
    service: PercentileServiceDependency,
    league: Annotated[str | None, Query(description="League name or slug, e.g. Allsvenskan")] = None,
    position: Annotated[str | None, Query(description="Position code (G, D, M, F) or name")] = None,
    player_id: Annotated[
        int | None,
        Query(description="Player whose profile supplies a missing league/position"),
    ] = None,
    season: Annotated[
        str | None,
        Query(description="Season id to score; defaults to each player's latest season"),
    ] = None,
) -> dict[str, Any]:
    """
    Get percentiles and ranks for every player in a league/position cohort.

    Players are ordered by rating, best first. An empty cohort is not an
    error: the response carries an empty `players` list and a `message`.
    When `season` is given only players with statistics for that season
    are scored and the response echoes it.
    """
    return service.get_cohort_percentiles(
        league=league,
        position=position,
        player_id=player_id,
        season=season,
    ).to_dict()


@router.get("/metrics", response_model=None)
def get_metrics(service: PercentileServiceDependency) -> dict[str, Any]:
    """List the ranked metrics and whether higher values are better."""
    return service.get_metric_catalogue()


@router.get("/leagues", response_model=None)
def get_leagues(service: PercentileServiceDependency) -> dict[str, Any]:
    """List the leagues a cohort can be requested for."""
    return {"leagues": service.get_leagues()}
