"""Periodic cache refresh via APScheduler."""

from __future__ import annotations

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from src.pipeline.event_cache import EventCache
from src.utils.logging import get_logger

_JOB_ID = "event_cache_refresh"


class RefreshScheduler:
    """Runs ``EventCache.scheduled_refresh`` every *interval_hours*.

    ``max_instances=1`` plus the cache's own single-flight refresh means a
    slow cycle is never doubled up by the timer.
    """

    def __init__(
        self,
        cache: EventCache,
        interval_hours: float,
        scheduler: AsyncIOScheduler | None = None,
    ) -> None:
        if interval_hours <= 0:
            raise ValueError("interval_hours must be positive")
        self._cache = cache
        self._interval_hours = interval_hours
        self._scheduler = scheduler or AsyncIOScheduler()
        self._logger = get_logger(__name__)

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def start(self) -> None:
        self._scheduler.add_job(
            self._cache.scheduled_refresh,
            IntervalTrigger(hours=self._interval_hours),
            id=_JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self._scheduler.start()
        self._logger.info("refresh_scheduler_started", interval_hours=self._interval_hours)

    def shutdown(self) -> None:
        """Request a stop.  Newer APScheduler releases stop on the next loop
        iteration, so ``running`` may stay true until the caller yields."""
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            self._logger.info("refresh_scheduler_stop_requested")
