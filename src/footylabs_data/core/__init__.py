"""
Core module for FootyLabs Data.

This module provides the foundational components:
- Configuration management (config.py)
- Data models (models.py)
- League registry and position codes (types.py)

Usage:
    from footylabs_data.core import Settings, get_settings
    from footylabs_data.core import LEAGUE_REGISTRY, get_league_config
    from footylabs_data.core import CohortEntry, ScoredEntry
"""

# Configuration
from .config import Settings, get_settings

# Types
from .types import (
    LEAGUE_REGISTRY,
    POSITION_NAMES,
    LeagueConfig,
    Position,
    find_league_for_tournament,
    get_league_config,
    normalize_position,
)

# Models
from .models import (
    CohortEntry,
    PercentileResponse,
    PlayerRow,
    ScoredEntry,
    SeasonPayload,
    SeasonRecord,
    TournamentRecord,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Types
    "LEAGUE_REGISTRY",
    "POSITION_NAMES",
    "LeagueConfig",
    "Position",
    "find_league_for_tournament",
    "get_league_config",
    "normalize_position",
    # Models
    "CohortEntry",
    "PercentileResponse",
    "PlayerRow",
    "ScoredEntry",
    "SeasonPayload",
    "SeasonRecord",
    "TournamentRecord",
]
