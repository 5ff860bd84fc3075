"""
Cohort extraction from season-keyed statistics.

The statistics blob stored per player has the shape::

    {
        "<source player key>": {
            "tournament_name": "Allsvenskan",
            "seasons": {
                "52540": {"statistics": {"rating": 7.1, "goals": 3, ...}},
                "63814": {"statistics": {...}},
            },
        },
        ...
    }

Season ids are compared as integers; the greatest one is the current season.
Entries are validated one at a time, so a malformed entry for another
tournament never hides the one being looked up.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Optional

from pydantic import ValidationError

from ..core.models import (
    CohortEntry,
    Number,
    PlayerRow,
    SeasonPayload,
    SeasonRecord,
    TournamentRecord,
)
from .config import COHORT_STAT_KEYS

logger = logging.getLogger(__name__)


def parse_season_record(raw: Any) -> Optional[SeasonRecord]:
    """
    Validate a raw statistics blob into a SeasonRecord.

    Entries that are not tournament objects are skipped individually.
    Returns None only when the blob itself is missing or not a mapping.
    """
    if not isinstance(raw, Mapping):
        return None

    record: SeasonRecord = {}
    for key, entry in raw.items():
        if not isinstance(entry, Mapping):
            continue
        try:
            record[str(key)] = TournamentRecord.model_validate(entry)
        except ValidationError as e:
            logger.debug("Malformed tournament entry %s skipped: %s", key, e.error_count())
    return record


def _season_number(season_id: str) -> Optional[int]:
    try:
        return int(season_id)
    except (TypeError, ValueError):
        return None


def _season_statistics(payload: Any) -> Optional[dict[str, Any]]:
    if payload is None:
        return None
    try:
        return SeasonPayload.model_validate(payload).statistics
    except ValidationError as e:
        logger.debug("Malformed season payload skipped: %s", e.error_count())
        return None


def latest_season_id(record: TournamentRecord) -> Optional[str]:
    """Return the season key with the numerically greatest id."""
    best_key: Optional[str] = None
    best_number: Optional[int] = None
    for season_id in record.seasons or {}:
        number = _season_number(season_id)
        if number is None:
            continue
        if best_number is None or number > best_number:
            best_key, best_number = season_id, number
    return best_key


def find_season(
    season_record: Optional[SeasonRecord],
    tournament_name: str,
    season_id: Optional[str] = None,
) -> Optional[tuple[str, Optional[dict[str, Any]]]]:
    """
    Locate a tournament season in a player's record.

    Without `season_id` the first entry whose tournament name matches exactly
    and which has at least one season wins, and its latest season is used.
    With `season_id` the first matching entry holding that season wins.

    Returns:
        (season id, statistics or None), or None if no season was found
    """
    if not season_record:
        return None

    for record in season_record.values():
        if record.tournament_name != tournament_name or not record.seasons:
            continue

        if season_id is None:
            latest = latest_season_id(record)
            if latest is None:
                return None
            return latest, _season_statistics(record.seasons[latest])

        if season_id in record.seasons:
            return season_id, _season_statistics(record.seasons[season_id])

    return None


def extract_current_season_stats(
    season_record: Optional[SeasonRecord],
    tournament_name: str,
) -> Optional[dict[str, Any]]:
    """
    Get the most recent season's statistics for a tournament.

    Args:
        season_record: Parsed statistics blob for one player
        tournament_name: Tournament to look for

    Returns:
        The statistics mapping, or None if the tournament is absent, has no
        seasons, or its latest season carries no statistics
    """
    found = find_season(season_record, tournament_name)
    return found[1] if found else None


def extract_league_season(
    season_record: Optional[SeasonRecord],
    tournament_names: Iterable[str],
    season_id: Optional[str] = None,
) -> Optional[tuple[str, dict[str, Any]]]:
    """Try each tournament name in order; return the first (season id, statistics) found."""
    for name in tournament_names:
        found = find_season(season_record, name, season_id)
        if found and found[1] is not None:
            return found[0], found[1]
    return None


def extract_league_stats(
    season_record: Optional[SeasonRecord],
    tournament_names: Iterable[str],
    season_id: Optional[str] = None,
) -> Optional[dict[str, Any]]:
    """Try each tournament name in order and return the first statistics found."""
    found = extract_league_season(season_record, tournament_names, season_id)
    return found[1] if found else None


def latest_tournament(season_record: Optional[SeasonRecord]) -> Optional[str]:
    """
    Name of the tournament holding the player's most recent season.

    Ties keep the first tournament encountered.
    """
    best_name: Optional[str] = None
    best_number: Optional[int] = None
    for record in (season_record or {}).values():
        season_id = latest_season_id(record)
        if season_id is None:
            continue
        number = int(season_id)
        if best_number is None or number > best_number:
            best_name, best_number = record.tournament_name, number
    return best_name


def stat_value(statistics: Mapping[str, Any], key: str) -> Number:
    """Read one statistic, defaulting missing or non-numeric values to 0."""
    value = statistics.get(key)
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return 0 if isinstance(value, float) and math.isnan(value) else value
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    return 0 if math.isnan(number) else number


def build_cohort_entry(
    row: PlayerRow,
    statistics: Mapping[str, Any],
    stat_keys: Sequence[str] = COHORT_STAT_KEYS,
    season_id: Optional[str] = None,
) -> CohortEntry:
    """Flatten a player row and one season's statistics into a cohort entry."""
    return CohortEntry(
        id=row.id,
        name=row.name,
        age=row.age,
        picture_url=row.picture_url,
        position=row.position or row.main_position,
        club=row.club_name,
        club_logo=row.club_logo_url,
        transfermarkt_url=row.transfermarkt_url,
        club_transfermarkt_url=row.club_transfermarkt_url,
        market_value_eur=row.market_value_eur,
        season=season_id,
        stats={key: stat_value(statistics, key) for key in stat_keys},
    )


def build_cohort(
    rows: Iterable[PlayerRow],
    tournament_names: Sequence[str],
    stat_keys: Sequence[str] = COHORT_STAT_KEYS,
    season_id: Optional[str] = None,
) -> list[CohortEntry]:
    """
    Build the cohort for a league from upstream player rows.

    Each player contributes their latest season, or `season_id` when given.
    Players without statistics for that season in any of the league's
    tournaments are dropped. Row order is preserved.
    """
    cohort: list[CohortEntry] = []
    for row in rows:
        season_record = parse_season_record(row.sf_data)
        found = extract_league_season(season_record, tournament_names, season_id)
        if found is None:
            logger.debug("Player %d has no stats for %s", row.id, ", ".join(tournament_names))
            continue
        season, statistics = found
        cohort.append(build_cohort_entry(row, statistics, stat_keys, season))
    return cohort
