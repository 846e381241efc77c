"""
Module base class for pairwise location comparison.

A Module receives candidate pairs and produces PairwiseJudgements. It only
compares: candidate generation belongs to the Blocker and grouping belongs to
the Clusterer.
"""

from abc import ABC, abstractmethod
from collections import Counter
from collections.abc import Iterable, Iterator

import numpy as np

from parkmatch.core.models import CandidatePair, LocationRecord, PairwiseJudgement
from parkmatch.core.reports import ScoreInspectionReport


class Module(ABC):
    """Abstract base class for location comparison logic.

    Design principles:
    - Operates on records already normalized by a provider connector
    - Returns rich PairwiseJudgement with reasons and provenance for audit
    - Deterministic: the same pair always yields the same judgement

    Example:
        class ExactAddressModule(Module):
            '''Matches records whose full address strings are identical.'''

            def score(self, left, right):
                same = left.address.full_address == right.address.full_address
                return PairwiseJudgement(
                    left_key=left.key_label,
                    right_key=right.key_label,
                    score=1.0 if same else 0.0,
                    decision_step="matched" if same else "address_mismatch",
                    reasons=["Identical full address" if same else "Different full address"],
                )
    """

    @abstractmethod
    def score(self, left: LocationRecord, right: LocationRecord) -> PairwiseJudgement:
        """Judge one pair of records.

        Args:
            left: First record
            right: Second record, assumed to differ from ``left`` in both
                provider and provider_id (the Blocker's responsibility)

        Returns:
            PairwiseJudgement with score in [0.0, 1.0]. Rejections have score
            0.0 and a single explanatory reason.
        """
        pass  # pragma: no cover

    def forward(self, candidates: Iterable[CandidatePair]) -> Iterator[PairwiseJudgement]:
        """Judge a stream of candidate pairs lazily."""
        for candidate in candidates:
            yield self.score(candidate.left, candidate.right)

    def inspect_scores(
        self, judgements: list[PairwiseJudgement], sample_size: int = 10
    ) -> ScoreInspectionReport:
        """Explore judgements without ground truth labels.

        Args:
            judgements: List of PairwiseJudgement objects to analyze
            sample_size: Number of examples to include (default: 10)

        Returns:
            ScoreInspectionReport with decision counts, matched-score statistics,
            examples and recommendations
        """
        return _inspect_scores_impl(judgements, sample_size)


def _inspect_scores_impl(
    judgements: list[PairwiseJudgement], sample_size: int = 10
) -> ScoreInspectionReport:
    """Shared implementation of inspect_scores for all Module types."""
    if not judgements:
        return ScoreInspectionReport(
            total_judgements=0,
            matched_pairs=0,
            decision_counts={},
            score_distribution={},
            high_scoring_examples=[],
            near_misses=[],
            recommendations=[
                "No judgements to analyze - score some candidate pairs first",
                "Run LocationMatcher.score_pairs() on a search result to produce judgements",
            ],
        )

    decision_counts = dict(Counter(j.decision_step for j in judgements))
    matched = [j for j in judgements if j.is_match]
    rejected = [j for j in judgements if not j.is_match]

    score_distribution: dict[str, float] = {}
    if matched:
        scores = [j.score for j in matched]
        score_distribution = {
            "mean": float(np.mean(scores)),
            "median": float(np.median(scores)),
            "std": float(np.std(scores)),
            "min": float(np.min(scores)),
            "max": float(np.max(scores)),
        }

    high_scoring_examples = [
        {
            "left_key": j.left_key,
            "right_key": j.right_key,
            "score": round(j.score, 3),
            "reasons": "; ".join(j.reasons),
        }
        for j in sorted(matched, key=lambda j: j.score, reverse=True)[:sample_size]
    ]

    # Rejections with the strongest address agreement are the most useful to review
    near_misses = [
        {
            "left_key": j.left_key,
            "right_key": j.right_key,
            "decision_step": j.decision_step,
            "reason": j.reasons[0] if j.reasons else "",
        }
        for j in sorted(
            rejected,
            key=lambda j: j.provenance.get("address_similarity", 0.0),
            reverse=True,
        )[:sample_size]
    ]

    return ScoreInspectionReport(
        total_judgements=len(judgements),
        matched_pairs=len(matched),
        decision_counts=decision_counts,
        score_distribution=score_distribution,
        high_scoring_examples=high_scoring_examples,
        near_misses=near_misses,
        recommendations=_generate_recommendations(len(judgements), decision_counts),
    )


def _generate_recommendations(total: int, decision_counts: dict[str, int]) -> list[str]:
    recommendations: list[str] = []

    price_rejections = decision_counts.get("price_gate", 0)
    if price_rejections / total > 0.2:
        recommendations.append(
            f"⚠️ {price_rejections} pairs rejected on price - if providers quote dynamic "
            "pricing, consider consider_price_in_matching=False or a larger "
            "maximum_price_difference_ratio"
        )

    low_confidence = decision_counts.get("below_confidence", 0)
    if low_confidence / total > 0.3:
        recommendations.append(
            f"⚠️ {low_confidence} pairs passed every gate but scored below "
            "minimum_match_confidence - review near misses before lowering it"
        )

    if decision_counts.get("matched", 0) == 0:
        recommendations.append("No pairs matched - check that providers cover the same airport")
    elif not recommendations:
        recommendations.append("✅ Rejection mix looks reasonable")

    return recommendations
