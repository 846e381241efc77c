"""StaticProvider: connector over pre-fetched records, keyed by airport code."""

import logging
from collections.abc import Iterable

from parkmatch.core.models import LocationRecord, ProviderType, SearchParams
from parkmatch.providers.base import ParkingProvider

logger = logging.getLogger(__name__)


class StaticProvider(ParkingProvider):
    """Serve records captured earlier (fixtures, replayed scrapes, demos).

    Records are grouped by their ``airport_code``. Records without one are
    served under ``default_airport``.

    Example:
        provider = StaticProvider(ProviderType.SPOTHERO, load_location_records("spothero.json"))
        records = await provider.search_locations(params)
    """

    def __init__(
        self,
        provider_type: ProviderType,
        records: Iterable[LocationRecord],
        default_airport: str | None = None,
    ):
        self.provider_type = provider_type
        self._by_airport: dict[str, list[LocationRecord]] = {}

        for record in records:
            if record.provider != provider_type:
                raise ValueError(
                    f"Record {record.key_label} does not belong to provider {provider_type.value}"
                )
            airport = record.airport_code or default_airport
            if airport is None:
                raise ValueError(f"Record {record.key_label} has no airport_code")
            self._by_airport.setdefault(airport.upper(), []).append(record)

    @property
    def airports(self) -> list[str]:
        return sorted(self._by_airport)

    async def search_locations(self, params: SearchParams) -> list[LocationRecord]:
        records = list(self._by_airport.get(params.airport_code, []))
        logger.debug(
            "%s returned %d records for %s",
            self.provider_type.value,
            len(records),
            params.airport_code,
        )
        return records
