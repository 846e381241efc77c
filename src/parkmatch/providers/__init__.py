"""
parkmatch.providers: Provider connector contract and helpers.

- ParkingProvider: the interface every connector implements
- StaticProvider: connector over pre-fetched records
- filter_by_date_range: availability-window filtering
- retry_with_backoff: exponential backoff for rate-limited sources
"""

from parkmatch.providers.availability import filter_by_date_range
from parkmatch.providers.base import ParkingProvider, RateLimitedError
from parkmatch.providers.retry import retry_with_backoff
from parkmatch.providers.static import StaticProvider

__all__ = [
    "filter_by_date_range",
    "ParkingProvider",
    "RateLimitedError",
    "retry_with_backoff",
    "StaticProvider",
]
