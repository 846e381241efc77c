"""Report models for match review and threshold tuning.

- MatchingReport: Human-readable summary of one matching run
- ScoreInspectionReport: Distribution of pairwise scores, for tuning criteria

Both are plain Pydantic models so they can be stored or serialized, and both
render to markdown with ``to_markdown()``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import numpy as np
from pydantic import BaseModel, Field

from parkmatch.core.criteria import MatchCriteria
from parkmatch.core.models import LocationRecord, MatchedLocation
from parkmatch.core.similarity import distance_meters

NOT_AVAILABLE = "N/A"

# Confidence above which a match counts as "high confidence" in the summary
HIGH_CONFIDENCE_THRESHOLD = 0.8

_QUALITY_LABELS = [
    (0.8, "High"),
    (0.7, "Good"),
    (0.6, "Fair"),
]


def quality_label(confidence: float, excellent_threshold: float = 0.9) -> str:
    """Bucket a confidence score into Excellent/High/Good/Fair/Low.

    Excellent starts at ``excellent_threshold`` (MatchCriteria.excellent_match_threshold).
    """
    if confidence >= excellent_threshold:
        return "Excellent"
    for threshold, label in _QUALITY_LABELS:
        if confidence >= threshold:
            return label
    return "Low"


def pairwise_distances(locations: list[LocationRecord]) -> list[float]:
    """Distances in metres between every pair of members that have coordinates."""
    distances: list[float] = []
    for i, left in enumerate(locations):
        for right in locations[i + 1 :]:
            if left.coordinates is not None and right.coordinates is not None:
                distances.append(distance_meters(left.coordinates, right.coordinates))
    return distances


class MatchingReport(BaseModel):
    """Summary and detail of one matching run.

    Aggregates over zero matches are None and render as "N/A".

    Example:
        report = build_matching_report(matches, criteria)
        print(report.to_markdown())

    Attributes:
        generated_at: UTC timestamp of report creation
        criteria: Criteria the matches were produced with
        total_matches: Number of matched location groups
        total_locations: Number of records across all groups
        provider_counts: Records per provider, in order of first appearance
        average_confidence: Mean confidence, or None without matches
        high_confidence_matches: Matches with confidence above 0.8
        matches: The matched locations, in report order
    """

    generated_at: datetime
    criteria: MatchCriteria
    total_matches: int
    total_locations: int
    provider_counts: dict[str, int]
    average_confidence: float | None = None
    high_confidence_matches: int
    matches: list[MatchedLocation] = Field(default_factory=list)

    @property
    def stats(self) -> dict[str, Any]:
        """Return only numerical metrics (no per-match detail)."""
        return {
            "total_matches": self.total_matches,
            "total_locations": self.total_locations,
            "provider_counts": self.provider_counts,
            "average_confidence": self.average_confidence,
            "high_confidence_matches": self.high_confidence_matches,
        }

    def to_markdown(self) -> str:
        """Generate human-readable markdown report.

        Returns:
            Formatted markdown string suitable for display.
        """
        criteria = self.criteria
        price_status = "Enabled" if criteria.consider_price_in_matching else "Disabled"
        if criteria.consider_price_in_matching:
            price_rule = (
                f"Prices must be within {criteria.maximum_price_difference_ratio * 100:.0f}% "
                "of each other"
            )
        else:
            price_rule = "Price differences ignored"

        lines = [
            "# Parking Location Matching Report",
            f"Generated: {self.generated_at.isoformat()}",
            f"Price Matching: {price_status}",
            "",
            "## Algorithm Overview",
            "This matching system identifies the same parking facilities across different providers using:",
            f"- **Name Similarity**: Fuzzy matching with >{criteria.minimum_name_similarity} minimum "
            f"threshold, >{criteria.strong_name_similarity} for strong evidence",
            f"- **Address Analysis**: PRIMARY SIGNAL - >{criteria.minimum_address_similarity} minimum, "
            f">{criteria.strong_address_similarity} for strong match",
            f"- **Geographic Proximity**: Locations within {criteria.maximum_distance_meters:g}m "
            f"considered nearby, under {criteria.same_location_distance_meters:g}m = same location",
            f"- **Price Correlation**: {price_rule}",
            "- **Smart Differentiation**: Prevents matching obviously different facilities",
            "",
        ]

        # Summary statistics
        if self.provider_counts:
            distribution = ", ".join(
                f"{provider}: {count}" for provider, count in self.provider_counts.items()
            )
        else:
            distribution = NOT_AVAILABLE
        if self.average_confidence is None:
            average = NOT_AVAILABLE
        else:
            average = f"{self.average_confidence * 100:.1f}%"

        lines.append("## Summary")
        lines.append(f"- Total matched location groups: {self.total_matches}")
        lines.append(f"- Total locations processed: {self.total_locations}")
        lines.append(f"- Provider distribution: {distribution}")
        lines.append(f"- Average confidence score: {average}")
        lines.append(
            f"- High confidence matches (>{HIGH_CONFIDENCE_THRESHOLD * 100:.0f}%): "
            f"{self.high_confidence_matches}"
        )
        lines.append("")
        lines.append("## Detailed Matches")
        lines.append("")

        for index, match in enumerate(self.matches, 1):
            lines.extend(self._match_section(index, match))

        return "\n".join(lines)

    def _match_section(self, index: int, match: MatchedLocation) -> list[str]:
        quality = quality_label(match.confidence_score, self.criteria.excellent_match_threshold)
        lines = [
            f"### Match {index}: {match.canonical_name}",
            f"**Confidence:** {match.confidence_score * 100:.1f}%",
            f"**Quality:** {quality}",
            f"**Address:** {match.canonical_address.full_address}",
        ]
        if match.coordinates is not None:
            lines.append(
                f"**Coordinates:** {match.coordinates.latitude:.6f}, "
                f"{match.coordinates.longitude:.6f}"
            )

        distances = pairwise_distances(match.locations)
        if distances:
            lines.append(
                f"**Geographic Spread:** Max {float(np.max(distances)):.0f}m, "
                f"Avg {float(np.mean(distances)):.0f}m between locations"
            )

        lines.append("")
        lines.append("**Providers:**")
        for location in match.locations:
            lines.append(
                f"- **{location.provider.value}**: {location.name} - "
                f"${location.pricing.daily_rate:.2f}/day"
            )
            lines.append(f"  - Address: {location.address.full_address}")
            if location.coordinates is not None:
                lines.append(
                    f"  - Coordinates: {location.coordinates.latitude}, "
                    f"{location.coordinates.longitude}"
                )
            if location.amenities:
                lines.append(f"  - Amenities: {', '.join(location.amenities)}")

        lines.append("")
        lines.append("**Match Reasons:**")
        for reason in match.match_reasons:
            lines.append(f"- {reason}")

        lines.append("")
        lines.append("---")
        lines.append("")
        return lines


def build_matching_report(
    matches: list[MatchedLocation],
    criteria: MatchCriteria | None = None,
    generated_at: datetime | None = None,
) -> MatchingReport:
    """Compute summary statistics for a list of matches.

    Args:
        matches: Output of ``find_matches``
        criteria: Criteria used to produce the matches (defaults if omitted)
        generated_at: Report timestamp (defaults to now, UTC)

    Returns:
        MatchingReport ready for ``to_markdown()``
    """
    provider_counts: dict[str, int] = {}
    for match in matches:
        for location in match.locations:
            provider = location.provider.value
            provider_counts[provider] = provider_counts.get(provider, 0) + 1

    confidences = [match.confidence_score for match in matches]
    average_confidence = float(np.mean(confidences)) if confidences else None

    return MatchingReport(
        generated_at=generated_at or datetime.now(timezone.utc),
        criteria=criteria or MatchCriteria(),
        total_matches=len(matches),
        total_locations=sum(len(match.locations) for match in matches),
        provider_counts=provider_counts,
        average_confidence=average_confidence,
        high_confidence_matches=sum(
            1 for confidence in confidences if confidence > HIGH_CONFIDENCE_THRESHOLD
        ),
        matches=list(matches),
    )


class ScoreInspectionReport(BaseModel):
    """Report for pairwise score exploration.

    Use this report to tune MatchCriteria against a real search:
    - How many eligible pairs were scored and how many matched?
    - Which rules rejected the pairs?
    - Score distribution over the pairs that survived every gate

    Attributes:
        total_judgements: Total number of pairwise judgements
        matched_pairs: Judgements that cleared every gate
        decision_counts: Judgements per decision step
        score_distribution: Statistical summary of matched scores
        high_scoring_examples: Top scoring pairs with reasons
        near_misses: Rejected pairs whose rejection reason is most informative
        recommendations: Rule-based suggestions for criteria tuning
    """

    total_judgements: int
    matched_pairs: int
    decision_counts: dict[str, int]
    score_distribution: dict[str, float]
    high_scoring_examples: list[dict[str, Any]]
    near_misses: list[dict[str, Any]]
    recommendations: list[str]

    @property
    def stats(self) -> dict[str, Any]:
        """Return only numerical metrics (no examples or recommendations)."""
        return {
            "total_judgements": self.total_judgements,
            "matched_pairs": self.matched_pairs,
            "decision_counts": self.decision_counts,
            "score_distribution": self.score_distribution,
        }

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()

    def to_markdown(self) -> str:
        """Generate human-readable markdown report."""
        lines = ["# Score Inspection Report\n"]

        lines.append("## Summary")
        lines.append(f"- **Total Judgements**: {self.total_judgements}")
        lines.append(f"- **Matched Pairs**: {self.matched_pairs}\n")

        if self.decision_counts:
            lines.append("## Decisions")
            for step, count in self.decision_counts.items():
                lines.append(f"- {step}: {count}")
            lines.append("")

        if self.score_distribution:
            lines.append("## Matched Score Distribution")
            dist = self.score_distribution
            lines.append(f"- **Mean**: {dist.get('mean', 0.0):.3f}")
            lines.append(f"- **Median**: {dist.get('median', 0.0):.3f}")
            lines.append(f"- **Min**: {dist.get('min', 0.0):.3f}")
            lines.append(f"- **Max**: {dist.get('max', 0.0):.3f}\n")

        if self.high_scoring_examples:
            lines.append("## High Scoring Examples")
            for i, example in enumerate(self.high_scoring_examples[:5], 1):
                lines.append(f"\n### Example {i}")
                for key, value in example.items():
                    lines.append(f"- **{key}**: {value}")

        if self.near_misses:
            lines.append("\n## Rejected Examples")
            for i, example in enumerate(self.near_misses[:5], 1):
                lines.append(f"\n### Example {i}")
                for key, value in example.items():
                    lines.append(f"- **{key}**: {value}")

        if self.recommendations:
            lines.append("\n## Recommendations")
            for rec in self.recommendations:
                lines.append(f"- {rec}")

        return "\n".join(lines)
