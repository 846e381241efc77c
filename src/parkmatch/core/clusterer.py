"""
Greedy seed-based clusterer for match formation.

This module provides the GreedyClusterer class, which walks the records in
input order and groups each unconsumed seed with every unconsumed partner the
Module accepts.
"""

import logging

from parkmatch.core.blocker import Blocker
from parkmatch.core.blockers.cross_provider import CrossProviderBlocker
from parkmatch.core.models import LocationRecord, RecordKey
from parkmatch.core.module import Module

logger = logging.getLogger(__name__)

# Cheap pre-filter applied before the configured confidence bar
CONSIDERATION_THRESHOLD = 0.5


class GreedyClusterer:
    """Single-pass, single-link grouping of records around seeds.

    For each record not yet consumed (in input order), every other unconsumed
    record the Blocker allows and the Module scores at or above ``threshold``
    joins the seed's cluster. A seed with no partner stays unmatched.

    Note:
        Partners are only checked against the seed, not against each other,
        so two members of one cluster may not clear the threshold pairwise.
        This is the intended heuristic, not a transitive closure.

    Note:
        The result depends on input order: the first seed to claim a record
        keeps it. Sort the input beforehand for order-independent output.

    Example:
        clusterer = GreedyClusterer(LocationScorerModule(criteria), threshold=0.7)
        groups = clusterer.cluster(records)
        # groups is a list of lists: [[seed, partner, ...], ...]
    """

    def __init__(
        self,
        module: Module,
        threshold: float = 0.7,
        blocker: Blocker | None = None,
    ):
        """Initialize clusterer.

        Args:
            module: Pairwise scorer
            threshold: Minimum pair score to join a seed (0.0 to 1.0)
            blocker: Candidate eligibility rule (defaults to CrossProviderBlocker)

        Raises:
            ValueError: If threshold is not in range [0.0, 1.0].
        """
        if not 0.0 <= threshold <= 1.0:
            raise ValueError("threshold must be between 0.0 and 1.0")
        self.module = module
        self.threshold = threshold
        self.blocker = blocker or CrossProviderBlocker()

    def cluster(self, records: list[LocationRecord]) -> list[list[LocationRecord]]:
        """Group records into clusters of two or more.

        Args:
            records: Input records in the order they should be consumed

        Returns:
            Clusters in formation order, each seed first followed by its
            partners in input order. Clusters are disjoint by record key.
        """
        clusters: list[list[LocationRecord]] = []
        processed: set[RecordKey] = set()

        for seed in records:
            if seed.key in processed:
                continue

            partners = self._find_partners(seed, records, processed)
            if not partners:
                continue

            members = [seed, *partners]
            clusters.append(members)
            processed.update(member.key for member in members)
            logger.debug(
                "Formed cluster around %s with %d partners", seed.key_label, len(partners)
            )

        return clusters

    def _find_partners(
        self,
        seed: LocationRecord,
        records: list[LocationRecord],
        processed: set[RecordKey],
    ) -> list[LocationRecord]:
        partners: list[LocationRecord] = []
        claimed: set[RecordKey] = set()
        for record in records:
            if record.key in processed or record.key in claimed:
                continue
            if not self.blocker.is_candidate(seed, record):
                continue

            judgement = self.module.score(seed, record)
            if judgement.score >= CONSIDERATION_THRESHOLD and judgement.score >= self.threshold:
                partners.append(record)
                claimed.add(record.key)

        return partners
