"""
Blocker base class for candidate-pair eligibility and generation.

A Blocker decides which records may be compared at all. It never scores.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from parkmatch.core.models import CandidatePair, LocationRecord


class Blocker(ABC):
    """Abstract base class for candidate generation.

    The Blocker is responsible for:
    - Deciding whether two records are eligible for comparison
    - Generating candidate pairs for audit and inspection

    The Blocker is NOT responsible for:
    - Comparing records (that's the Module's job)
    - Grouping records into matches (that's the Clusterer's job)
    """

    name: str = "blocker"

    @abstractmethod
    def is_candidate(self, left: LocationRecord, right: LocationRecord) -> bool:
        """Return True if ``left`` and ``right`` may be compared."""
        pass  # pragma: no cover

    def stream(self, records: list[LocationRecord]) -> Iterator[CandidatePair]:
        """Yield every eligible pair (i < j) in input order.

        Note:
            This is O(N²). Airport-scoped searches hold at most a few hundred
            records, so exhaustive comparison is affordable.
        """
        for i, left in enumerate(records):
            for right in records[i + 1 :]:
                if self.is_candidate(left, right):
                    yield CandidatePair(left=left, right=right, blocker_name=self.name)
