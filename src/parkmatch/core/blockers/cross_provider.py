"""CrossProviderBlocker: only records from different providers are compared."""

from parkmatch.core.blocker import Blocker
from parkmatch.core.models import LocationRecord


class CrossProviderBlocker(Blocker):
    """Pairs records whose provider and provider_id both differ.

    A provider can't corroborate itself, so two listings from the same
    provider are never candidates. Equal provider_ids are excluded as well,
    which also rules out comparing a record with itself.

    Example:
        blocker = CrossProviderBlocker()
        pairs = list(blocker.stream(records))
    """

    name = "cross_provider_blocker"

    def is_candidate(self, left: LocationRecord, right: LocationRecord) -> bool:
        return left.provider != right.provider and left.provider_id != right.provider_id
