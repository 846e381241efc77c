"""Tests for parkmatch.data loaders and JsonMatchStore."""

import json
from datetime import datetime
from pathlib import Path

import pytest
from pydantic import ValidationError

from parkmatch import find_matches
from parkmatch.core.models import SearchParams
from parkmatch.data import JsonMatchStore, MatchSnapshot, load_location_records, load_matches
from tests.fixtures.locations import lax_economy_records

PARAMS = SearchParams(
    airport_code="LAX",
    start_time=datetime(2026, 5, 1, 8),
    end_time=datetime(2026, 5, 3, 18),
)


class TestLoadLocationRecords:
    """Tests for load_location_records function."""

    def test_load_valid_records(self, tmp_path: Path) -> None:
        """A JSON list of records loads into LocationRecords."""
        records = lax_economy_records()
        path = tmp_path / "records.json"
        path.write_text(json.dumps([r.model_dump(mode="json") for r in records]))

        assert load_location_records(path) == records

    def test_accepts_string_path(self, tmp_path: Path) -> None:
        """String paths are accepted."""
        path = tmp_path / "records.json"
        path.write_text("[]")
        assert load_location_records(str(path)) == []

    def test_file_not_found(self, tmp_path: Path) -> None:
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Required file not found"):
            load_location_records(tmp_path / "missing.json")

    def test_rejects_non_list(self, tmp_path: Path) -> None:
        """A JSON object instead of a list raises ValueError."""
        path = tmp_path / "records.json"
        path.write_text(json.dumps({"records": []}))
        with pytest.raises(ValueError, match="expected a list of records"):
            load_location_records(path)

    def test_malformed_record(self, tmp_path: Path) -> None:
        """An incomplete record raises ValidationError."""
        path = tmp_path / "records.json"
        path.write_text(json.dumps([{"provider_id": "x", "provider": "parkwhiz"}]))
        with pytest.raises(ValidationError):
            load_location_records(path)


class TestJsonMatchStore:
    """Tests for snapshot persistence and load_matches."""

    def test_save_and_load(self, tmp_path: Path) -> None:
        """A saved snapshot loads back with the same params and matches."""
        matches = find_matches(lax_economy_records())
        store = JsonMatchStore(tmp_path / "matches")

        path = store.save(PARAMS, matches)

        assert path.parent == tmp_path / "matches"
        assert path.name.startswith("LAX_")
        assert path.suffix == ".json"

        snapshot = load_matches(path)
        assert isinstance(snapshot, MatchSnapshot)
        assert snapshot.params == PARAMS
        assert snapshot.matches == matches
        assert snapshot.saved_at.tzinfo is not None

    def test_empty_matches(self, tmp_path: Path) -> None:
        """A search without matches still saves a snapshot."""
        path = JsonMatchStore(tmp_path).save(PARAMS, [])
        assert load_matches(path).matches == []

    def test_load_matches_missing_key(self, tmp_path: Path) -> None:
        """A snapshot without matches raises ValueError."""
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps({"params": {}}))
        with pytest.raises(ValueError, match="missing 'matches' key"):
            load_matches(path)

    def test_load_matches_file_not_found(self, tmp_path: Path) -> None:
        """A missing snapshot raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_matches(tmp_path / "nope.json")
