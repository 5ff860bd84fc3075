"""
Query modules for the player store.
"""

from .players import PlayerQueries

__all__ = ["PlayerQueries"]
