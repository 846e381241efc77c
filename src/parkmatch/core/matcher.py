"""LocationMatcher: cross-provider entity resolution for parking listings.

Wires the CrossProviderBlocker, LocationScorerModule, GreedyClusterer and
cluster aggregation into one pure function of records and criteria.
"""

import logging
from collections.abc import Iterator

from parkmatch.core.blockers.cross_provider import CrossProviderBlocker
from parkmatch.core.canonical import build_matched_location
from parkmatch.core.clusterer import GreedyClusterer
from parkmatch.core.criteria import MatchCriteria
from parkmatch.core.models import LocationRecord, MatchedLocation, PairwiseJudgement
from parkmatch.core.modules.location_scorer import LocationScorerModule
from parkmatch.core.reports import build_matching_report

logger = logging.getLogger(__name__)


class LocationMatcher:
    """Find records from different providers that describe the same facility.

    Holds no state between calls: every ``find_matches`` recomputes from
    scratch, so one instance may serve concurrent callers.

    Example:
        matcher = LocationMatcher(MatchCriteria(consider_price_in_matching=False))
        matches = matcher.find_matches(parkwhiz_records + spothero_records)
        print(matcher.generate_matching_report(matches))
    """

    def __init__(self, criteria: MatchCriteria | None = None):
        self.criteria = criteria or MatchCriteria()
        self.blocker = CrossProviderBlocker()
        self.module = LocationScorerModule(self.criteria)
        self.clusterer = GreedyClusterer(
            self.module,
            threshold=self.criteria.minimum_match_confidence,
            blocker=self.blocker,
        )

    def find_matches(
        self, records: list[LocationRecord], sort_input: bool = False
    ) -> list[MatchedLocation]:
        """Cluster records and aggregate each cluster into a MatchedLocation.

        Args:
            records: Records from any number of providers
            sort_input: Sort records by (provider, provider_id) before
                clustering, making the result independent of input order

        Returns:
            Matches sorted by descending confidence. Unmatched records do not
            appear; an empty or single-record input yields [].
        """
        if sort_input:
            records = sorted(records, key=lambda r: (r.provider.value, r.provider_id))

        groups = self.clusterer.cluster(records)
        matches = [build_matched_location(group, self.criteria) for group in groups]
        matches.sort(key=lambda match: match.confidence_score, reverse=True)

        logger.info(
            "Matched %d of %d records into %d locations",
            sum(len(match.locations) for match in matches),
            len(records),
            len(matches),
        )
        return matches

    def score_pairs(self, records: list[LocationRecord]) -> Iterator[PairwiseJudgement]:
        """Judge every eligible cross-provider pair, for audit and tuning.

        Use with ``self.module.inspect_scores`` to see why pairs were rejected.
        """
        return self.module.forward(self.blocker.stream(records))

    def generate_matching_report(self, matches: list[MatchedLocation]) -> str:
        """Render matches as a markdown report using this matcher's criteria."""
        return build_matching_report(matches, self.criteria).to_markdown()


def find_matches(
    records: list[LocationRecord], criteria: MatchCriteria | None = None
) -> list[MatchedLocation]:
    """Convenience wrapper around ``LocationMatcher(criteria).find_matches``."""
    return LocationMatcher(criteria).find_matches(records)


def generate_matching_report(
    matches: list[MatchedLocation], criteria: MatchCriteria | None = None
) -> str:
    """Convenience wrapper around ``LocationMatcher(criteria).generate_matching_report``."""
    return LocationMatcher(criteria).generate_matching_report(matches)
