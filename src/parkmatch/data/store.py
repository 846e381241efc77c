"""JsonMatchStore: one JSON snapshot file per search."""

import logging
from datetime import datetime, timezone
from pathlib import Path

from parkmatch.core.models import MatchedLocation, SearchParams
from parkmatch.data.schemas import MatchSnapshot

logger = logging.getLogger(__name__)


class JsonMatchStore:
    """Persist search results under ``directory`` as ``<AIRPORT>_<timestamp>.json``.

    Example:
        store = JsonMatchStore("output/matches")
        service = ParkingAggregationService(providers, store=store)
    """

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def save(self, params: SearchParams, matches: list[MatchedLocation]) -> Path:
        """Write a snapshot and return its path."""
        saved_at = datetime.now(timezone.utc)
        snapshot = MatchSnapshot(params=params, saved_at=saved_at, matches=matches)

        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / f"{params.airport_code}_{saved_at:%Y%m%dT%H%M%S%fZ}.json"
        path.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")

        logger.info("Saved %d matches to %s", len(matches), path)
        return path
