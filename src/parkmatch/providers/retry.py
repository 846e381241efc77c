"""Exponential backoff for connector calls."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from parkmatch.providers.base import RateLimitedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = 4,
    initial_delay: float = 1.0,
    exponential_base: float = 3.0,
    retry_on: tuple[type[BaseException], ...] = (RateLimitedError,),
    description: str = "operation",
) -> T:
    """Run ``operation``, retrying matching failures with growing delays.

    Delays are ``initial_delay * exponential_base ** attempt``: with the
    defaults 1s, 3s, 9s, 27s.

    Args:
        operation: Zero-argument coroutine factory, called once per attempt
        max_retries: Retries after the first attempt
        initial_delay: Delay in seconds before the first retry
        exponential_base: Growth factor between delays
        retry_on: Exception types worth retrying; anything else propagates
        description: Operation name for log messages

    Returns:
        The operation's result

    Raises:
        The last error once retries are exhausted, or any non-retryable error
        immediately
    """
    if max_retries < 0:
        raise ValueError("max_retries must be non-negative")

    for attempt in range(max_retries + 1):
        try:
            return await operation()
        except retry_on as e:
            if attempt == max_retries:
                logger.error("Max retries (%d) exceeded for %s", max_retries, description)
                raise

            delay = initial_delay * exponential_base**attempt
            logger.warning(
                "Retryable error on %s (attempt %d/%d), retrying in %.1fs: %s",
                description,
                attempt + 1,
                max_retries,
                delay,
                e,
            )
            await asyncio.sleep(delay)

    raise AssertionError("unreachable")  # pragma: no cover
