"""Loaders for captured provider records and persisted match snapshots.

Record files hold a JSON list of LocationRecord objects (as written by
``model_dump(mode="json")``); snapshot files hold one MatchSnapshot.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from parkmatch.core.models import LocationRecord
from parkmatch.data.schemas import MatchSnapshot

logger = logging.getLogger(__name__)

_RECORD_LIST = TypeAdapter(list[LocationRecord])


def _read_json(path: Path) -> Any:
    if not path.exists():
        msg = f"Required file not found: {path}"
        raise FileNotFoundError(msg)

    with open(path, encoding="utf-8") as f:
        return json.load(f)


def load_location_records(path: Path | str) -> list[LocationRecord]:
    """Load a JSON list of location records.

    Args:
        path: JSON file containing a list of record objects

    Returns:
        Validated LocationRecords in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file does not contain a list
        pydantic.ValidationError: If a record is malformed

    Example:
        >>> records = load_location_records("captures/spothero_lax.json")
        >>> provider = StaticProvider(ProviderType.SPOTHERO, records)
    """
    path = Path(path)
    data = _read_json(path)

    if not isinstance(data, list):
        msg = f"Invalid format in {path}: expected a list of records"
        raise ValueError(msg)

    records = _RECORD_LIST.validate_python(data)
    logger.info("Loaded %d location records from %s", len(records), path)
    return records


def load_matches(path: Path | str) -> MatchSnapshot:
    """Load a match snapshot written by JsonMatchStore.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file does not contain a snapshot object
    """
    path = Path(path)
    data = _read_json(path)

    if not isinstance(data, dict) or "matches" not in data:
        msg = f"Invalid format in {path}: missing 'matches' key"
        raise ValueError(msg)

    snapshot = MatchSnapshot.model_validate(data)
    logger.info("Loaded %d matches from %s", len(snapshot.matches), path)
    return snapshot
