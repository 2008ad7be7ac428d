"""Shared concurrency primitives for the aggregation and enrichment pipeline.

Two patterns are exposed:

1. **throttled_gather** -- ``asyncio.gather`` with an optional semaphore, so
   fan-out over source adapters (or anything else) can be bounded without
   changing call sites.

2. **IntervalRateLimiter** -- spaces successive ``acquire()`` calls at least
   ``interval_seconds`` apart.  The enricher acquires once per batch, which
   inserts the inter-batch delay upstream AI providers expect.  Tests inject
   a zero-interval limiter so nothing actually sleeps.
"""

from __future__ import annotations

import asyncio
import time
from typing import Awaitable, Callable, TypeVar

import structlog

from src.utils.logging import get_logger

_T = TypeVar("_T")

_logger: structlog.BoundLogger = get_logger(__name__)


async def throttled_gather(
    coros: list[Awaitable[_T]],
    semaphore: asyncio.Semaphore | None = None,
    return_exceptions: bool = True,
) -> list[_T | BaseException]:
    """Run awaitables concurrently with optional semaphore throttling.

    Parameters
    ----------
    coros:
        Awaitable objects to execute concurrently.
    semaphore:
        Optional semaphore for concurrency control.  When ``None`` every
        awaitable is started at once.
    return_exceptions:
        If ``True``, exceptions are returned in the results list rather
        than being raised.  Mirrors ``asyncio.gather`` semantics.

    Returns
    -------
    list[_T | BaseException]
        Results in the same order as the input coroutines.
    """
    if semaphore is None:
        return await asyncio.gather(*coros, return_exceptions=return_exceptions)

    async def _wrapped(coro: Awaitable[_T]) -> _T:
        async with semaphore:
            return await coro

    tasks = [_wrapped(c) for c in coros]
    return await asyncio.gather(*tasks, return_exceptions=return_exceptions)


class IntervalRateLimiter:
    """Enforce a minimum interval between successive ``acquire()`` calls.

    The first call never waits.  Each later call sleeps for whatever is left
    of ``interval_seconds`` since the previous call returned.  Callers are
    serialised through an internal lock so two concurrent acquirers cannot
    both skip the wait.
    """

    def __init__(
        self,
        interval_seconds: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if interval_seconds < 0:
            raise ValueError("interval_seconds must be >= 0")
        self._interval = interval_seconds
        self._clock = clock
        self._sleep = sleep
        self._last: float | None = None
        self._lock = asyncio.Lock()

    @property
    def interval_seconds(self) -> float:
        return self._interval

    async def acquire(self) -> None:
        async with self._lock:
            if self._last is not None and self._interval > 0:
                remaining = self._interval - (self._clock() - self._last)
                if remaining > 0:
                    _logger.debug("rate_limiter_wait", seconds=round(remaining, 3))
                    await self._sleep(remaining)
            self._last = self._clock()

    def reset(self) -> None:
        """Forget the previous acquisition so the next call passes immediately."""
        self._last = None
