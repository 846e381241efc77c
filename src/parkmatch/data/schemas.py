"""Data schemas for persisted matching results."""

from datetime import datetime

from pydantic import BaseModel

from parkmatch.core.models import MatchedLocation, SearchParams


class MatchSnapshot(BaseModel):
    """The matches produced by one search, as written to disk.

    Attributes:
        params: The search that produced the matches
        saved_at: UTC time the snapshot was written
        matches: Matched locations in confidence order

    Example:
        >>> snapshot = MatchSnapshot(params=params, saved_at=now, matches=matches)
        >>> path.write_text(snapshot.model_dump_json(indent=2))
    """

    params: SearchParams
    saved_at: datetime
    matches: list[MatchedLocation]
