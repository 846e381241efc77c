"""Obvious-mismatch rules applied before any pair scoring.

Proximity and address similarity cannot tell "Hilton LAX Hotel Parking" from
"Marriott LAX Hotel Parking" two blocks apart, nor "Lot A" from "Lot B" on the
same airport road. The rules below only fire on an explicit conflict between
the two names.
"""

import re

_DESIGNATOR_PATTERNS = [
    (designator, re.compile(rf"\b{designator}\s+([a-z]|\d+)\b", re.IGNORECASE))
    for designator in ("lot", "terminal", "building", "garage", "structure")
]

LODGING_BRANDS = (
    "marriott",
    "hilton",
    "hyatt",
    "sheraton",
    "westin",
    "doubletree",
    "embassy",
    "holiday inn",
    "best western",
    "courtyard",
    "fairfield",
    "residence inn",
)

_BRAND_PATTERN = re.compile(
    r"\b(" + "|".join(brand.replace(" ", r"\s+") for brand in LODGING_BRANDS) + r")\b",
    re.IGNORECASE,
)


def extract_designators(name: str) -> dict[str, str]:
    """Map each designator found in ``name`` to its value.

    Example:
        >>> extract_designators("Terminal 2 Parking Lot B")
        {'lot': 'b', 'terminal': '2'}
    """
    found: dict[str, str] = {}
    for designator, pattern in _DESIGNATOR_PATTERNS:
        match = pattern.search(name)
        if match:
            found[designator] = match.group(1).lower()
    return found


def extract_brand(name: str) -> str | None:
    """Return the first lodging brand in ``name`` (lowercased, single-spaced)."""
    match = _BRAND_PATTERN.search(name)
    if match is None:
        return None
    return " ".join(match.group(1).lower().split())


def find_obvious_mismatch(name1: str, name2: str) -> str | None:
    """Explain why two names denote different facilities, or return None.

    Two names conflict when they carry the same designator (lot, terminal,
    building, garage, structure) with different values, or when both name a
    lodging brand and the brands differ. Same designator with the same value
    is not a conflict, and a designator present on one side only is ignored.
    """
    designators1 = extract_designators(name1)
    designators2 = extract_designators(name2)
    for designator, value1 in designators1.items():
        value2 = designators2.get(designator)
        if value2 is not None and value1 != value2:
            return f"Different {designator} designators ({value1.upper()} vs {value2.upper()})"

    brand1 = extract_brand(name1)
    brand2 = extract_brand(name2)
    if brand1 and brand2 and brand1 != brand2:
        return f"Different hotel brands ({brand1} vs {brand2})"

    return None


def are_obviously_different(name1: str, name2: str) -> bool:
    return find_obvious_mismatch(name1, name2) is not None
