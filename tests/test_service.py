"""Tests for ParkingAggregationService fan-out, failure isolation and persistence."""

import asyncio
from datetime import datetime

import pytest

from parkmatch import LocationMatcher, MatchCriteria
from parkmatch.core.models import LocationRecord, ProviderType, SearchParams
from parkmatch.providers import ParkingProvider, RateLimitedError, StaticProvider
from parkmatch.service import ParkingAggregationService, SearchResult
from parkmatch.settings import Settings
from tests.fixtures.locations import lax_economy_records, singleton_record

PARAMS = SearchParams(
    airport_code="LAX",
    start_time=datetime(2026, 5, 1, 8),
    end_time=datetime(2026, 5, 3, 18),
)


def _settings(**overrides) -> Settings:
    fields = {
        "provider_timeout_seconds": 1.0,
        "provider_max_retries": 2,
        "retry_initial_delay_seconds": 0.0,
    }
    fields.update(overrides)
    return Settings(**fields)


def _static_providers() -> list[StaticProvider]:
    by_provider: dict[ProviderType, list[LocationRecord]] = {}
    for record in [*lax_economy_records(), singleton_record()]:
        by_provider.setdefault(record.provider, []).append(record)
    return [StaticProvider(provider, records) for provider, records in by_provider.items()]


class BrokenProvider(ParkingProvider):
    provider_type = ProviderType.SPOTHERO

    async def search_locations(self, params):
        raise RuntimeError("upstream returned HTTP 500")


class SlowProvider(ParkingProvider):
    provider_type = ProviderType.CHEAP_AIRPORT_PARKING

    async def search_locations(self, params):
        await asyncio.sleep(10)
        return []


class ThrottledProvider(ParkingProvider):
    """Rate limited on the first call, then serves its records."""

    provider_type = ProviderType.SPOTHERO

    def __init__(self, records):
        self.records = records
        self.calls = 0

    async def search_locations(self, params):
        self.calls += 1
        if self.calls == 1:
            raise RateLimitedError("HTTP 403")
        return self.records


class RecordingStore:
    def __init__(self):
        self.saved = []

    def save(self, params, matches):
        self.saved.append((params, matches))
        return "saved"


class FailingStore:
    """Store whose disk is full."""

    def save(self, params, matches):
        raise OSError("No space left on device")


class TestSearch:
    """Test ParkingAggregationService.search end to end."""

    @pytest.mark.asyncio
    async def test_matches_across_providers(self):
        """Records from all providers are pooled and matched."""
        service = ParkingAggregationService(_static_providers(), settings=_settings())
        result = await service.search(PARAMS)

        assert isinstance(result, SearchResult)
        assert len(result.records) == 4
        assert len(result.matches) == 1
        assert len(result.matches[0].locations) == 3
        assert result.provider_errors == {}
        assert [r.provider_id for r in result.unmatched_records] == ["cap-wally"]

    @pytest.mark.asyncio
    async def test_no_providers(self):
        """A service without providers returns an empty result."""
        result = await ParkingAggregationService([], settings=_settings()).search(PARAMS)
        assert result.records == []
        assert result.matches == []

    @pytest.mark.asyncio
    async def test_failing_provider_is_isolated(self, caplog):
        """One failing provider is reported while the others still match."""
        parkwhiz, _, cheap = lax_economy_records()
        providers = [
            StaticProvider(ProviderType.PARKWHIZ, [parkwhiz]),
            BrokenProvider(),
            StaticProvider(ProviderType.CHEAP_AIRPORT_PARKING, [cheap]),
        ]
        result = await ParkingAggregationService(providers, settings=_settings()).search(PARAMS)

        assert result.provider_errors == {"spothero": "RuntimeError: upstream returned HTTP 500"}
        assert len(result.matches) == 1
        assert {r.provider_id for r in result.matches[0].locations} == {"pw-econ", "cap-econ"}
        assert "Provider spothero failed" in caplog.text

    @pytest.mark.asyncio
    async def test_slow_provider_times_out(self):
        """A provider over the timeout contributes nothing."""
        parkwhiz, spothero, _ = lax_economy_records()
        providers = [
            StaticProvider(ProviderType.PARKWHIZ, [parkwhiz]),
            StaticProvider(ProviderType.SPOTHERO, [spothero]),
            SlowProvider(),
        ]
        service = ParkingAggregationService(providers, settings=_settings(provider_timeout_seconds=0.05))
        result = await service.search(PARAMS)

        assert result.provider_errors == {"cheap_airport_parking": "timed out after 0.05s"}
        assert len(result.matches) == 1

    @pytest.mark.asyncio
    async def test_rate_limited_provider_is_retried(self):
        """A rate-limited provider is retried and then contributes."""
        parkwhiz, spothero, _ = lax_economy_records()
        throttled = ThrottledProvider([spothero])
        providers = [StaticProvider(ProviderType.PARKWHIZ, [parkwhiz]), throttled]

        result = await ParkingAggregationService(providers, settings=_settings()).search(PARAMS)

        assert throttled.calls == 2
        assert result.provider_errors == {}
        assert len(result.matches) == 1

    @pytest.mark.asyncio
    async def test_unavailable_records_are_filtered_before_matching(self):
        """Records closed for the search window never reach matching."""
        parkwhiz, spothero, cheap = lax_economy_records()
        closed = spothero.model_copy(
            update={
                "available_from": datetime(2026, 6, 1),
                "available_until": datetime(2026, 6, 30),
            }
        )
        providers = [
            StaticProvider(ProviderType.PARKWHIZ, [parkwhiz]),
            StaticProvider(ProviderType.SPOTHERO, [closed]),
            StaticProvider(ProviderType.CHEAP_AIRPORT_PARKING, [cheap]),
        ]
        result = await ParkingAggregationService(providers, settings=_settings()).search(PARAMS)

        assert {r.provider_id for r in result.records} == {"pw-econ", "cap-econ"}
        assert len(result.matches[0].locations) == 2

    @pytest.mark.asyncio
    async def test_matches_are_saved_to_store(self):
        """The configured store receives the search and its matches."""
        store = RecordingStore()
        service = ParkingAggregationService(_static_providers(), settings=_settings(), store=store)
        result = await service.search(PARAMS)

        assert len(store.saved) == 1
        saved_params, saved_matches = store.saved[0]
        assert saved_params == PARAMS
        assert saved_matches == result.matches


    @pytest.mark.asyncio
    async def test_failing_store_keeps_matches(self, caplog):
        """A store error is logged and reported without losing the matches."""
        service = ParkingAggregationService(
            _static_providers(), settings=_settings(), store=FailingStore()
        )
        result = await service.search(PARAMS)

        assert len(result.matches) == 1
        assert result.persistence_error == "OSError: No space left on device"
        assert "Failed to persist matches for LAX" in caplog.text

    @pytest.mark.asyncio
    async def test_successful_store_has_no_persistence_error(self):
        """A store that accepts the matches leaves persistence_error unset."""
        service = ParkingAggregationService(
            _static_providers(), settings=_settings(), store=RecordingStore()
        )
        result = await service.search(PARAMS)
        assert result.persistence_error is None

    @pytest.mark.asyncio
    async def test_errors_from_two_connectors_of_one_type_are_kept(self):
        """A second failing connector of the same type gets a numbered key."""
        parkwhiz, _, cheap = lax_economy_records()
        providers = [
            StaticProvider(ProviderType.PARKWHIZ, [parkwhiz]),
            BrokenProvider(),
            BrokenProvider(),
            StaticProvider(ProviderType.CHEAP_AIRPORT_PARKING, [cheap]),
        ]
        result = await ParkingAggregationService(providers, settings=_settings()).search(PARAMS)

        assert result.provider_errors == {
            "spothero": "RuntimeError: upstream returned HTTP 500",
            "spothero#2": "RuntimeError: upstream returned HTTP 500",
        }
        assert len(result.matches) == 1

class TestConfiguration:
    """Test how the service builds its matcher."""

    def test_matcher_uses_settings_overrides(self):
        """Settings overrides flow into the matcher criteria."""
        settings = _settings(consider_price_in_matching=False)
        service = ParkingAggregationService([], settings=settings)
        assert service.matcher.criteria.consider_price_in_matching is False

    def test_explicit_matcher_wins(self):
        """An explicit matcher is used as given."""
        matcher = LocationMatcher(MatchCriteria(minimum_match_confidence=0.9))
        service = ParkingAggregationService([], matcher=matcher, settings=_settings())
        assert service.matcher is matcher
