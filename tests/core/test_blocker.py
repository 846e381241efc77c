"""Tests for the Blocker base class and CrossProviderBlocker."""

import pytest

from parkmatch.core.blocker import Blocker
from parkmatch.core.blockers import CrossProviderBlocker
from parkmatch.core.models import ProviderType
from tests.fixtures.locations import lax_economy_records, make_record


def test_cannot_instantiate_abstract_blocker() -> None:
    """Test that Blocker cannot be instantiated directly."""
    with pytest.raises(TypeError, match="Can't instantiate abstract class"):
        Blocker()  # type: ignore[abstract]


class TestCrossProviderBlocker:
    """Test CrossProviderBlocker pair eligibility."""

    def test_different_providers_are_candidates(self):
        """Different providers and ids form a candidate pair."""
        left = make_record(provider_id="a", provider=ProviderType.PARKWHIZ)
        right = make_record(provider_id="b", provider=ProviderType.SPOTHERO)
        assert CrossProviderBlocker().is_candidate(left, right)

    def test_same_provider_is_not_candidate(self):
        """Listings from one provider are never candidates."""
        left = make_record(provider_id="a", provider=ProviderType.SPOTHERO)
        right = make_record(provider_id="b", provider=ProviderType.SPOTHERO)
        assert not CrossProviderBlocker().is_candidate(left, right)

    def test_equal_provider_id_is_not_candidate(self):
        """Equal provider_ids across providers are never candidates."""
        left = make_record(provider_id="123", provider=ProviderType.PARKWHIZ)
        right = make_record(provider_id="123", provider=ProviderType.SPOTHERO)
        assert not CrossProviderBlocker().is_candidate(left, right)

    def test_record_is_never_its_own_candidate(self):
        """A record is not compared with itself."""
        record = make_record()
        assert not CrossProviderBlocker().is_candidate(record, record)


class TestStream:
    """Test streaming candidate pairs over a record list."""

    def test_three_providers_give_three_pairs(self):
        """Three providers yield every i < j pair in input order."""
        pairs = list(CrossProviderBlocker().stream(lax_economy_records()))

        assert [(p.left.provider_id, p.right.provider_id) for p in pairs] == [
            ("pw-econ", "sh-econ"),
            ("pw-econ", "cap-econ"),
            ("sh-econ", "cap-econ"),
        ]
        assert all(p.blocker_name == "cross_provider_blocker" for p in pairs)

    def test_same_provider_pairs_are_skipped(self):
        """Same-provider pairs are left out of the stream."""
        records = [
            make_record(provider_id="a", provider=ProviderType.PARKWHIZ),
            make_record(provider_id="b", provider=ProviderType.PARKWHIZ),
            make_record(provider_id="c", provider=ProviderType.SPOTHERO),
        ]
        pairs = list(CrossProviderBlocker().stream(records))
        assert len(pairs) == 2

    def test_empty_input(self):
        """No records yield no pairs."""
        assert list(CrossProviderBlocker().stream([])) == []
