"""Tests for the ParkingProvider contract and StaticProvider."""

from datetime import datetime

import pytest

from parkmatch.core.models import ProviderType, SearchParams
from parkmatch.providers import ParkingProvider, StaticProvider
from tests.fixtures.locations import make_record


def _params(airport_code: str = "LAX") -> SearchParams:
    return SearchParams(
        airport_code=airport_code,
        start_time=datetime(2026, 5, 1, 8),
        end_time=datetime(2026, 5, 3, 18),
    )


def test_cannot_instantiate_abstract_provider() -> None:
    """Test that ParkingProvider cannot be instantiated directly."""
    with pytest.raises(TypeError, match="Can't instantiate abstract class"):
        ParkingProvider()  # type: ignore[abstract]


class TestStaticProvider:
    """Test the in-memory provider connector."""

    @pytest.mark.asyncio
    async def test_returns_records_for_airport(self):
        """Records for the searched airport come back in order."""
        records = [make_record(provider_id="a"), make_record(provider_id="b")]
        provider = StaticProvider(ProviderType.PARKWHIZ, records)

        result = await provider.search_locations(_params())

        assert [r.provider_id for r in result] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_unknown_airport_returns_empty_list(self):
        """An airport without records gives an empty list."""
        provider = StaticProvider(ProviderType.PARKWHIZ, [make_record()])
        assert await provider.search_locations(_params("JFK")) == []

    @pytest.mark.asyncio
    async def test_airport_lookup_is_case_insensitive(self):
        """Airport codes match in any case."""
        provider = StaticProvider(ProviderType.PARKWHIZ, [make_record(airport_code="lax")])
        assert len(await provider.search_locations(_params("lax"))) == 1

    @pytest.mark.asyncio
    async def test_default_airport_for_records_without_code(self):
        """default_airport covers records without an airport code."""
        record = make_record(airport_code=None)
        provider = StaticProvider(ProviderType.PARKWHIZ, [record], default_airport="sfo")

        assert provider.airports == ["SFO"]
        assert await provider.search_locations(_params("SFO")) == [record]

    @pytest.mark.asyncio
    async def test_returned_list_is_a_copy(self):
        """Callers cannot mutate the stored records."""
        provider = StaticProvider(ProviderType.PARKWHIZ, [make_record()])
        first = await provider.search_locations(_params())
        first.clear()
        assert len(await provider.search_locations(_params())) == 1

    def test_rejects_records_from_other_provider(self):
        """Records from another provider are rejected."""
        record = make_record(provider=ProviderType.SPOTHERO)
        with pytest.raises(ValueError, match="does not belong to provider parkwhiz"):
            StaticProvider(ProviderType.PARKWHIZ, [record])

    def test_rejects_records_without_airport(self):
        """Records without any airport are rejected."""
        with pytest.raises(ValueError, match="has no airport_code"):
            StaticProvider(ProviderType.PARKWHIZ, [make_record(airport_code=None)])

    def test_airports_sorted(self):
        """airports lists codes in sorted order."""
        records = [
            make_record(provider_id="a", airport_code="SFO"),
            make_record(provider_id="b", airport_code="LAX"),
        ]
        assert StaticProvider(ProviderType.PARKWHIZ, records).airports == ["LAX", "SFO"]
