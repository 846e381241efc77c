"""
ParkingProvider base class for provider connectors.

A connector fetches listings for one airport from one third-party source and
normalizes them into LocationRecords. HTTP, scraping and payload parsing live
in concrete connectors; the matching engine only sees finished records.
"""

from abc import ABC, abstractmethod

from parkmatch.core.models import LocationRecord, ProviderType, SearchParams


class RateLimitedError(Exception):
    """Raised by a connector when the source rejects a request as rate limited (HTTP 403)."""


class ParkingProvider(ABC):
    """Abstract base class for provider connectors.

    Contract:
    - ``search_locations`` returns normalized records, best-effort populating
      coordinates, amenities and the availability window
    - An unknown airport code yields an empty list, never an exception
    - Transient throttling is signalled with RateLimitedError so callers can
      retry with backoff; any other exception means the provider failed

    Example:
        class SpotHeroProvider(ParkingProvider):
            provider_type = ProviderType.SPOTHERO

            async def search_locations(self, params):
                payload = await self._client.get_facilities(params.airport_code)
                return [normalize_facility(item) for item in payload]
    """

    provider_type: ProviderType

    @abstractmethod
    async def search_locations(self, params: SearchParams) -> list[LocationRecord]:
        """Fetch and normalize listings for ``params.airport_code``.

        Args:
            params: Airport code and the requested parking window

        Returns:
            Normalized records; [] for an unknown airport code
        """
        pass  # pragma: no cover
