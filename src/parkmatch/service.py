"""
ParkingAggregationService: fan out to providers, fan in, match, persist.

Provider failures never abort a search: a failing or timed-out provider
contributes zero records and a logged warning, and matching proceeds on
whatever the other providers returned. A store that fails to save is
reported on the result the same way.
"""

import asyncio
import logging
from collections.abc import Iterable
from typing import Any, Protocol

from pydantic import BaseModel, Field

from parkmatch.core.matcher import LocationMatcher
from parkmatch.core.models import LocationRecord, MatchedLocation, SearchParams
from parkmatch.providers.availability import filter_by_date_range
from parkmatch.providers.base import ParkingProvider
from parkmatch.providers.retry import retry_with_backoff
from parkmatch.settings import Settings

logger = logging.getLogger(__name__)


class MatchStore(Protocol):
    """Anything that can persist the matches of one search."""

    def save(self, params: SearchParams, matches: list[MatchedLocation]) -> Any: ...


class SearchResult(BaseModel):
    """Outcome of one aggregated search.

    Attributes:
        params: The search
        records: Records from all providers after availability filtering
        matches: Matched locations in confidence order
        provider_errors: Failure message per provider that contributed nothing,
            keyed by provider type (``spothero#2`` for a second connector of a type)
        persistence_error: Why the store rejected the matches, if it did
    """

    params: SearchParams
    records: list[LocationRecord]
    matches: list[MatchedLocation]
    provider_errors: dict[str, str] = Field(default_factory=dict)
    persistence_error: str | None = None

    @property
    def unmatched_records(self) -> list[LocationRecord]:
        matched = {location.key for match in self.matches for location in match.locations}
        return [record for record in self.records if record.key not in matched]


def _error_key(provider_errors: dict[str, str], provider: ParkingProvider) -> str:
    name = provider.provider_type.value
    key = name
    suffix = 2
    while key in provider_errors:
        key = f"{name}#{suffix}"
        suffix += 1
    return key


class ParkingAggregationService:
    """Search every provider concurrently and match the combined listings.

    Example:
        service = ParkingAggregationService(
            [parkwhiz, spothero, cheap_airport_parking],
            store=JsonMatchStore("output/matches"),
        )
        result = await service.search(SearchParams(
            airport_code="LAX",
            start_time="2025-10-20T10:00:00",
            end_time="2025-10-22T18:00:00",
        ))
        print(result.matches[0].canonical_name)
    """

    def __init__(
        self,
        providers: Iterable[ParkingProvider],
        matcher: LocationMatcher | None = None,
        settings: Settings | None = None,
        store: MatchStore | None = None,
    ):
        self.providers = list(providers)
        self.settings = settings or Settings()
        self.matcher = matcher or LocationMatcher(self.settings.to_match_criteria())
        self.store = store

    async def search(self, params: SearchParams) -> SearchResult:
        """Fetch, filter, match and (optionally) persist one search."""
        outcomes = await asyncio.gather(
            *(self._fetch(provider, params) for provider in self.providers)
        )

        records: list[LocationRecord] = []
        provider_errors: dict[str, str] = {}
        for provider, (provider_records, error) in zip(self.providers, outcomes):
            if error is not None:
                provider_errors[_error_key(provider_errors, provider)] = error
            records.extend(provider_records)

        records = filter_by_date_range(records, params.start_time, params.end_time)
        matches = self.matcher.find_matches(records)

        logger.info(
            "Search %s: %d records from %d providers (%d failed), %d matches",
            params.airport_code,
            len(records),
            len(self.providers),
            len(provider_errors),
            len(matches),
        )

        persistence_error = None
        if self.store is not None:
            try:
                await asyncio.to_thread(self.store.save, params, matches)
            except Exception as e:
                logger.error("Failed to persist matches for %s: %s", params.airport_code, e)
                persistence_error = f"{type(e).__name__}: {e}"

        return SearchResult(
            params=params,
            records=records,
            matches=matches,
            provider_errors=provider_errors,
            persistence_error=persistence_error,
        )

    async def _fetch(
        self, provider: ParkingProvider, params: SearchParams
    ) -> tuple[list[LocationRecord], str | None]:
        name = provider.provider_type.value
        settings = self.settings
        try:
            records = await asyncio.wait_for(
                retry_with_backoff(
                    lambda: provider.search_locations(params),
                    max_retries=settings.provider_max_retries,
                    initial_delay=settings.retry_initial_delay_seconds,
                    exponential_base=settings.retry_exponential_base,
                    description=f"{name} search for {params.airport_code}",
                ),
                timeout=settings.provider_timeout_seconds,
            )
        except asyncio.TimeoutError:
            message = f"timed out after {settings.provider_timeout_seconds:g}s"
            logger.warning("Provider %s %s", name, message)
            return [], message
        except Exception as e:
            logger.warning("Provider %s failed: %s", name, e)
            return [], f"{type(e).__name__}: {e}"

        return records, None
