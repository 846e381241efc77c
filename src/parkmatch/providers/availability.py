"""Provider-agnostic availability-window filtering."""

from datetime import datetime, timezone

from parkmatch.core.models import LocationRecord


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def filter_by_date_range(
    records: list[LocationRecord], start: datetime, end: datetime
) -> list[LocationRecord]:
    """Keep records whose availability window overlaps ``[start, end]``.

    A record missing ``available_from`` or ``available_until`` is assumed to be
    always available and is kept. Boundaries touching counts as overlap.
    """
    start = _as_utc(start)
    end = _as_utc(end)

    kept: list[LocationRecord] = []
    for record in records:
        if record.available_from is None or record.available_until is None:
            kept.append(record)
            continue

        if _as_utc(record.available_from) <= end and _as_utc(record.available_until) >= start:
            kept.append(record)

    return kept
