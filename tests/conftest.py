"""
Pytest configuration for footylabs-data tests.

Database access is replaced by FakeDB, which answers the two queries the
service issues (cohort rows and single-player lookup) from in-memory rows.
"""

from __future__ import annotations

import os
from typing import Any, Optional

import pytest


class FakeDB:
    """In-memory stand-in for PostgresDB."""

    def __init__(self, rows: Optional[list[dict[str, Any]]] = None, error: Optional[Exception] = None):
        self.rows = list(rows or [])
        self.error = error
        self.calls: list[tuple[str, tuple]] = []
        self.opened = False

    def open(self) -> None:
        self.opened = True

    def close(self) -> None:
        self.opened = False

    def fetchall(self, query: Any, params: tuple = ()) -> list[dict[str, Any]]:
        self.calls.append(("fetchall", params))
        if self.error:
            raise self.error
        league_name, position = params
        return [
            dict(row)
            for row in self.rows
            if row.get("league_name") == league_name and row.get("position") == position
        ]

    def fetchone(self, query: Any, params: tuple = ()) -> Optional[dict[str, Any]]:
        self.calls.append(("fetchone", params))
        if self.error:
            raise self.error
        if not params:
            return {"test": 1}
        for row in self.rows:
            if row["id"] == params[0]:
                return dict(row)
        return None


def make_sf_data(
    tournament: str = "Allsvenskan",
    seasons: Optional[dict[str, Optional[dict[str, Any]]]] = None,
    key: str = "1001",
) -> dict[str, Any]:
    """Build a season-keyed statistics blob with one tournament entry."""
    seasons = seasons if seasons is not None else {"52540": {"rating": 7.0}}
    return {
        key: {
            "tournament_name": tournament,
            "seasons": {
                season_id: ({"statistics": stats} if stats is not None else {})
                for season_id, stats in seasons.items()
            },
        }
    }


def make_row(
    player_id: int,
    name: str,
    rating: float = 7.0,
    league: Optional[str] = "Allsvenskan",
    position: Optional[str] = "M",
    tournament: str = "Allsvenskan",
    sf_data: Any = None,
    **stats: Any,
) -> dict[str, Any]:
    """Build a cohort query row."""
    if sf_data is None:
        sf_data = make_sf_data(tournament, {"52540": {"rating": rating, **stats}})
    return {
        "id": player_id,
        "name": name,
        "age": 24,
        "picture_url": f"https://img.example.com/{player_id}.png",
        "main_position": "Central Midfield",
        "position": position,
        "sf_data": sf_data,
        "transfermarkt_url": f"https://www.transfermarkt.com/p/{player_id}",
        "market_value_eur": 250000,
        "club_name": "Hammarby IF",
        "club_logo_url": "https://img.example.com/club.png",
        "club_transfermarkt_url": "https://www.transfermarkt.com/c/1",
        "league_name": league,
    }


@pytest.fixture
def cohort_rows() -> list[dict[str, Any]]:
    """Three midfielders in Allsvenskan with ratings 7.0, 8.5, 8.5."""
    return [
        make_row(1, "Anders Berg", rating=7.0, goals=2, yellowCards=4, fouls=20),
        make_row(2, "Erik Lund", rating=8.5, goals=9, yellowCards=1, fouls=11),
        make_row(3, "Oskar Nyberg", rating=8.5, goals=5, yellowCards=1, fouls=15),
    ]


@pytest.fixture
def fake_db(cohort_rows) -> FakeDB:
    return FakeDB(cohort_rows)


@pytest.fixture(scope="session")
def database_url():
    """Get the database URL for integration tests."""
    url = os.environ.get("DATABASE_URL") or os.environ.get("SUPABASE_DATABASE_URL")
    if not url:
        pytest.skip("DATABASE_URL not set")
    return url
