"""Data utilities for parkmatch.

This module provides loading of captured provider records and persistence of
matching results.
"""

from parkmatch.data.loaders import load_location_records, load_matches
from parkmatch.data.schemas import MatchSnapshot
from parkmatch.data.store import JsonMatchStore

__all__ = [
    # Schemas
    "MatchSnapshot",
    # Loaders
    "load_location_records",
    "load_matches",
    # Persistence
    "JsonMatchStore",
]
