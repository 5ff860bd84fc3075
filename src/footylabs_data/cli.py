#!/usr/bin/env python3
"""
Command-line interface for cohort percentiles.

Usage:
    footylabs-data percentiles --league Allsvenskan --position M
    footylabs-data percentiles --player-id 123456 --json
    footylabs-data percentiles --league Eliteserien --position F --season 52540
    footylabs-data metrics
    footylabs-data leagues
    footylabs-data serve --port 8000
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from .core.config import get_settings
from .percentiles.config import get_stat_label, percentile_band

logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("footylabs.cli")

# Metrics shown in the table view, in column order
TABLE_METRICS = ("rating", "goals", "assists", "keyPasses", "accuratePassesPercentage")


def get_db():
    """Get the database connection."""
    from .pg_connection import get_postgres_db

    return get_postgres_db()


def get_service(db=None):
    from .services.percentiles import PercentileService

    return PercentileService(db if db is not None else get_db())


def _print_table(result: dict, limit: Optional[int]) -> None:
    players = result["players"]
    if limit:
        players = players[:limit]

    season = result.get("season") or "latest"
    print(f"\n{result['league']} - position {result['position']} - season {season}")
    print("=" * 50)
    print(f"Players: {result['totalPlayers']}")
    if result.get("message"):
        print(result["message"])
        return

    header = f"{'#':>3}  {'Player':<28}" + "".join(
        f"{get_stat_label(key)[:14]:>16}" for key in TABLE_METRICS
    )
    print(header)
    print("-" * len(header))
    for i, player in enumerate(players, 1):
        cells = "".join(
            f"{player['stats'][key]:>8} ({player['percentiles'][key]:>3})  "
            for key in TABLE_METRICS
        )
        name = (player.get("name") or str(player["id"]))[:28]
        print(f"{i:>3}  {name:<28}{cells}")

    if players:
        best = players[0]
        band = percentile_band(best["percentiles"]["rating"])
        print(f"\nTop rated: {best.get('name')} ({band})")


def cmd_percentiles(args: argparse.Namespace) -> int:
    """Score a league/position cohort."""
    from .services.percentiles import CohortSelectionError, DataStoreError

    try:
        service = get_service()
    except ValueError as e:
        logger.error("Database not configured: %s", e)
        return 1

    try:
        result = service.get_cohort_percentiles(
            league=args.league,
            position=args.position,
            player_id=args.player_id,
            season=args.season,
        ).to_dict()
    except CohortSelectionError as e:
        logger.error("%s (league=%s, position=%s)", e.message, e.league, e.position)
        return 1
    except DataStoreError as e:
        logger.error("%s: %s", e.message, e.details)
        return 1

    if args.json:
        if args.limit:
            result["players"] = result["players"][: args.limit]
        print(json.dumps(result, indent=2, default=str))
    else:
        _print_table(result, args.limit)
    return 0


def cmd_metrics(args: argparse.Namespace) -> int:
    """List ranked metrics."""
    from .percentiles.config import PLAYER_METRICS, PRIMARY_METRIC

    print(f"\nRanked metrics (sorted by {PRIMARY_METRIC})")
    print("=" * 50)
    for metric in PLAYER_METRICS:
        direction = "higher is better" if metric.higher_is_better else "lower is better"
        print(f"  {metric.key:<30} {metric.label:<20} {direction}")
    return 0


def cmd_leagues(args: argparse.Namespace) -> int:
    """List supported leagues."""
    from .core.types import LEAGUE_REGISTRY

    print("\nLeagues")
    print("=" * 50)
    for cfg in LEAGUE_REGISTRY.values():
        aliases = ", ".join(cfg.tournament_names)
        print(f"  {cfg.id:<15} {cfg.name:<15} {cfg.country:<10} tier {cfg.tier}  [{aliases}]")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the API server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "footylabs_data.api.main:app",
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="footylabs-data",
        description="FootyLabs cohort percentiles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # percentiles command
    pct_parser = subparsers.add_parser("percentiles", help="Score a league/position cohort")
    pct_parser.add_argument("--league", help="League name or slug")
    pct_parser.add_argument("--position", help="Position code (G, D, M, F) or name")
    pct_parser.add_argument("--player-id", type=int, help="Detect league/position from this player")
    pct_parser.add_argument("--season", help="Season id to score (default: latest per player)")
    pct_parser.add_argument("--limit", type=int, help="Only show the top N players")
    pct_parser.add_argument("--json", action="store_true", help="Print the API response as JSON")

    subparsers.add_parser("metrics", help="List ranked metrics")
    subparsers.add_parser("leagues", help="List supported leagues")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", help="Bind host (default: settings.api_host)")
    serve_parser.add_argument("--port", type=int, help="Bind port (default: settings.api_port)")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "percentiles": cmd_percentiles,
        "metrics": cmd_metrics,
        "leagues": cmd_leagues,
        "serve": cmd_serve,
    }

    cmd_func = commands.get(args.command)
    if cmd_func:
        return cmd_func(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
