"""Cluster aggregation: canonical record, mean coordinates, confidence rubric."""

import uuid

import numpy as np

from parkmatch.core.criteria import MatchCriteria
from parkmatch.core.models import Coordinates, LocationRecord, MatchedLocation

# Confidence never reaches certainty: the rubric is not a probability
CONFIDENCE_CAP = 0.95


def completeness_score(location: LocationRecord) -> float:
    """Rate how much optional data a record carries, in range [0.0, 1.0]."""
    score = 0.0
    if location.coordinates is not None:
        score += 0.3
    if location.address.zip:
        score += 0.2
    if location.distance_to_airport:
        score += 0.2
    if location.amenities:
        score += 0.2
    if location.pricing.hourly_rate:
        score += 0.1
    return score


def select_canonical(locations: list[LocationRecord]) -> LocationRecord:
    """Most complete member; the first one encountered wins ties."""
    best = locations[0]
    best_score = completeness_score(best)
    for location in locations[1:]:
        score = completeness_score(location)
        if score > best_score:
            best, best_score = location, score
    return best


def average_coordinates(locations: list[LocationRecord]) -> Coordinates | None:
    """Arithmetic mean of member coordinates, or None if no member has any."""
    points = [
        (location.coordinates.latitude, location.coordinates.longitude)
        for location in locations
        if location.coordinates is not None
    ]
    if not points:
        return None
    latitude, longitude = np.mean(np.array(points), axis=0)
    return Coordinates(latitude=float(latitude), longitude=float(longitude))


def cluster_confidence(
    locations: list[LocationRecord],
    coordinates: Coordinates | None,
    criteria: MatchCriteria,
) -> float:
    """Rubric over corroboration count and data completeness, capped at 0.95.

    Each extra provider adds ``provider_count_bonus``; mean coordinates add
    ``coordinate_data_bonus``; a zip code on every member adds
    ``complete_address_bonus``.

    Note:
        A new member can cost the zip bonus, so confidence is non-decreasing in
        member count as long as provider_count_bonus >= complete_address_bonus
        (true for the defaults).
    """
    confidence = criteria.base_confidence_score
    confidence += (len(locations) - 1) * criteria.provider_count_bonus
    if coordinates is not None:
        confidence += criteria.coordinate_data_bonus
    if all(location.address.zip for location in locations):
        confidence += criteria.complete_address_bonus
    return min(CONFIDENCE_CAP, confidence)


def build_matched_location(
    locations: list[LocationRecord], criteria: MatchCriteria
) -> MatchedLocation:
    """Aggregate cluster members into a MatchedLocation.

    Args:
        locations: Seed first, then its partners in input order (at least two)
        criteria: Confidence rubric weights

    Returns:
        MatchedLocation with a fresh id
    """
    canonical = select_canonical(locations)
    coordinates = average_coordinates(locations)

    match_reasons = [f"Matched across {len(locations)} providers"]
    match_reasons.extend(f"{location.provider.value}: {location.name}" for location in locations)

    return MatchedLocation(
        id=f"match_{uuid.uuid4().hex[:12]}",
        canonical_name=canonical.name,
        canonical_address=canonical.address,
        coordinates=coordinates,
        locations=list(locations),
        confidence_score=cluster_confidence(locations, coordinates, criteria),
        match_reasons=match_reasons,
    )
