"""LocationScorerModule: weighted address/name/proximity/price compatibility.

The score is a running sum of partial credits guarded by hard gates:

    address  0.6 x similarity   (+ same_address_bonus when strong)
    name     0.25 x similarity  (when above minimum_name_similarity)
    distance 0.15 x closeness   (+ 0.10 when within same_location_distance_meters)
    price    0.1 x (1 - ratio)  (when price matching is enabled)

Any gate failure returns score 0.0 with a single reason. The capped total must
itself reach minimum_match_confidence.
"""

import logging

from parkmatch.core.criteria import MatchCriteria
from parkmatch.core.filters import find_obvious_mismatch
from parkmatch.core.models import LocationRecord, PairwiseJudgement
from parkmatch.core.module import Module
from parkmatch.core.similarity import (
    address_similarity,
    distance_meters,
    normalize_name,
    string_similarity,
)

logger = logging.getLogger(__name__)

ADDRESS_WEIGHT = 0.6
NAME_WEIGHT = 0.25
PROXIMITY_WEIGHT = 0.15
PRICE_WEIGHT = 0.1
SAME_LOCATION_BONUS = 0.10


def price_difference_ratio(rate1: float, rate2: float) -> float:
    """Relative price gap ``|p1 - p2| / max(p1, p2)``; two zero rates give 0.0."""
    highest = max(rate1, rate2)
    if highest <= 0:
        return 0.0
    return abs(rate1 - rate2) / highest


class LocationScorerModule(Module):
    """Pairwise scorer for parking listings from different providers.

    Address similarity is the dominant signal: two independently scraped
    listings with near-identical street addresses are far more likely to be
    the same facility than two listings with similar names.

    Example:
        scorer = LocationScorerModule(MatchCriteria())
        judgement = scorer.score(parkwhiz_record, spothero_record)
        if judgement.is_match:
            print(judgement.score, judgement.reasons)
    """

    def __init__(self, criteria: MatchCriteria | None = None):
        self.criteria = criteria or MatchCriteria()

    def score(self, left: LocationRecord, right: LocationRecord) -> PairwiseJudgement:
        criteria = self.criteria
        provenance: dict[str, float | None] = {}

        mismatch = find_obvious_mismatch(left.name, right.name)
        if mismatch is not None:
            return self._reject(
                left,
                right,
                "obvious_mismatch",
                f"Locations are obviously different facilities: {mismatch}",
                provenance,
            )

        reasons: list[str] = []
        total = 0.0

        # 1. Address similarity (primary signal)
        address_sim = address_similarity(left.address, right.address)
        provenance["address_similarity"] = address_sim

        distance: float | None = None
        if left.coordinates is not None and right.coordinates is not None:
            distance = distance_meters(left.coordinates, right.coordinates)
        provenance["distance_meters"] = distance

        if address_sim < criteria.strong_address_similarity:
            if distance is not None:
                if distance > criteria.same_location_distance_meters:
                    return self._reject(
                        left,
                        right,
                        "address_too_far",
                        f"Different addresses ({address_sim * 100:.1f}% similarity) and too far "
                        f"apart ({distance:.0f}m > {criteria.same_location_distance_meters:g}m "
                        "threshold)",
                        provenance,
                    )
            elif address_sim < criteria.minimum_address_similarity:
                return self._reject(
                    left,
                    right,
                    "address_unverified",
                    f"Insufficient address similarity ({address_sim * 100:.1f}%) and no "
                    "coordinates to verify proximity",
                    provenance,
                )

        if address_sim >= criteria.minimum_address_similarity:
            total += address_sim * ADDRESS_WEIGHT
            reasons.append(
                f'Address similarity: {address_sim * 100:.1f}% ("{left.address.full_address}" '
                f'vs "{right.address.full_address}")'
            )
            if address_sim >= criteria.strong_address_similarity:
                total += criteria.same_address_bonus
                reasons.append(
                    f"Strong address match bonus: +{criteria.same_address_bonus * 100:.0f}%"
                )

        # 2. Name similarity
        name_sim = string_similarity(normalize_name(left.name), normalize_name(right.name))
        provenance["name_similarity"] = name_sim
        if name_sim >= criteria.minimum_name_similarity:
            total += name_sim * NAME_WEIGHT
            reasons.append(
                f'Name similarity: {name_sim * 100:.1f}% ("{left.name}" vs "{right.name}")'
            )

        # 3. Coordinate proximity
        if distance is not None and distance <= criteria.maximum_distance_meters:
            proximity = max(0.0, 1 - distance / criteria.maximum_distance_meters)
            total += proximity * PROXIMITY_WEIGHT
            reasons.append(f"Geographic proximity: {distance:.0f}m apart")

            if distance <= criteria.same_location_distance_meters:
                total += SAME_LOCATION_BONUS
                reasons.append(f"Same location bonus: very close ({distance:.0f}m)")

        # 4. Price correlation (hard gate when enabled)
        if criteria.consider_price_in_matching:
            rate1 = left.pricing.daily_rate
            rate2 = right.pricing.daily_rate
            ratio = price_difference_ratio(rate1, rate2)
            provenance["price_difference_ratio"] = ratio
            if ratio > criteria.maximum_price_difference_ratio:
                return self._reject(
                    left,
                    right,
                    "price_gate",
                    f"Price difference too large: {ratio * 100:.1f}% "
                    f"(max: {criteria.maximum_price_difference_ratio * 100:.0f}%)",
                    provenance,
                )
            total += (1 - ratio) * PRICE_WEIGHT
            reasons.append(
                f"Price similarity: {ratio * 100:.1f}% difference (${rate1:g} vs ${rate2:g})"
            )

        total = min(1.0, total)
        provenance["raw_score"] = total
        if total < criteria.minimum_match_confidence:
            return self._reject(
                left,
                right,
                "below_confidence",
                f"Total confidence too low: {total * 100:.1f}% "
                f"(minimum: {criteria.minimum_match_confidence * 100:.0f}%)",
                provenance,
            )

        return PairwiseJudgement(
            left_key=left.key_label,
            right_key=right.key_label,
            score=total,
            decision_step="matched",
            reasons=reasons,
            provenance=provenance,
        )

    def _reject(
        self,
        left: LocationRecord,
        right: LocationRecord,
        decision_step: str,
        reason: str,
        provenance: dict[str, float | None],
    ) -> PairwiseJudgement:
        logger.debug("Rejected %s vs %s: %s", left.key_label, right.key_label, reason)
        return PairwiseJudgement(
            left_key=left.key_label,
            right_key=right.key_label,
            score=0.0,
            decision_step=decision_step,
            reasons=[reason],
            provenance=provenance,
        )
