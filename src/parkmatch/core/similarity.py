"""Similarity primitives: edit-distance similarity, text normalization, distance.

All functions are pure and total over well-typed input. String comparisons are
case-sensitive, so callers lowercase (or normalize) first.
"""

import math
import re

from rapidfuzz.distance import Levenshtein

from parkmatch.core.models import Address, Coordinates

EARTH_RADIUS_METERS = 6_371_000.0

_NAME_STOPWORDS = re.compile(r"\b(the|hotel|garage|lot|parking|self|park)\b", re.IGNORECASE)
_ADDRESS_TOKENS = re.compile(
    r"\b(street|st|avenue|ave|road|rd|drive|dr|boulevard|blvd|north|n|south|s|east|e|west|w)\b\.?",
    re.IGNORECASE,
)
_APOSTROPHES = re.compile(r"['’]")
_WHITESPACE = re.compile(r"\s+")

# Address component weights
STREET_WEIGHT = 0.6
CITY_WEIGHT = 0.3
STATE_WEIGHT = 0.1


def string_similarity(a: str, b: str) -> float:
    """Levenshtein similarity: ``1 - distance / max(len(a), len(b))``.

    Insertions, deletions and substitutions all cost 1. Two empty strings are
    identical (1.0).

    Example:
        >>> string_similarity("kitten", "sitting")
        0.5714285714285714
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - Levenshtein.distance(a, b) / longest


def normalize_name(name: str) -> str:
    """Lowercase, drop apostrophes and filler words ("the", "hotel", "lot", ...).

    Only used ahead of name similarity, never for display.
    """
    text = _APOSTROPHES.sub("", name.lower())
    text = _NAME_STOPWORDS.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def normalize_address(address: str) -> str:
    """Lowercase and strip street suffixes and compass directions.

    Both the abbreviated and the full forms are removed ("st", "street",
    "n.", "north"), matched on word boundaries only.
    """
    text = _ADDRESS_TOKENS.sub("", address.lower())
    return _WHITESPACE.sub(" ", text).strip()


def address_similarity(addr1: Address, addr2: Address) -> float:
    """Weighted street/city/state agreement in range [0.0, 1.0].

    Street is compared with edit-distance similarity after normalization;
    city and state are exact case-insensitive matches.
    """
    street_similarity = string_similarity(
        normalize_address(addr1.street), normalize_address(addr2.street)
    )
    city_match = 1.0 if addr1.city.lower() == addr2.city.lower() else 0.0
    state_match = 1.0 if addr1.state.lower() == addr2.state.lower() else 0.0

    # fsum keeps identical addresses at exactly 1.0
    return math.fsum(
        [
            street_similarity * STREET_WEIGHT,
            city_match * CITY_WEIGHT,
            state_match * STATE_WEIGHT,
        ]
    )


def distance_meters(c1: Coordinates, c2: Coordinates) -> float:
    """Great-circle distance in metres (Haversine).

    The haversine term is clamped to [0, 1] so rounding near identical or
    antipodal points cannot leave the domain of ``sqrt``.
    """
    lat1 = math.radians(c1.latitude)
    lat2 = math.radians(c2.latitude)
    d_lat = lat2 - lat1
    d_lon = math.radians(c2.longitude - c1.longitude)

    a = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    a = min(1.0, max(0.0, a))

    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_METERS * c
