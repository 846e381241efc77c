"""
parkmatch: Cross-provider matching of airport parking listings.

This package identifies which listings from different parking providers refer
to the same physical facility:
- parkmatch.core: The matching engine (pure, synchronous)
- parkmatch.providers: Connector contract and helpers
- parkmatch.service: Concurrent provider fan-out around the engine
"""

from parkmatch.core import (
    LocationMatcher,
    LocationRecord,
    MatchCriteria,
    MatchedLocation,
    find_matches,
    generate_matching_report,
)

__all__ = [
    "find_matches",
    "generate_matching_report",
    "LocationMatcher",
    "LocationRecord",
    "MatchCriteria",
    "MatchedLocation",
]

__version__ = "0.1.0"
