"""In-memory event cache with TTL freshness and single-flight refresh.

State machine::

    EMPTY (last_updated is None) --refresh--> FRESH (age < ttl)
    FRESH --time passes--> STALE (age >= ttl) --refresh--> FRESH

Writers
-------
Only two operations mutate the cache:

* ``refresh()`` runs aggregation + enrichment and swaps in a new
  :class:`CacheSnapshot` (events and ``last_updated`` together, in one
  assignment).  At most one refresh cycle runs at a time; concurrent
  callers await the in-flight task.  A failed cycle leaves the previous
  snapshot in place and raises :class:`CacheRefreshError`.
* ``publish()`` prepends an approved submission without touching
  ``last_updated``.  Published events are also remembered separately and
  re-applied in front of every refreshed set, so a publication that lands
  while a refresh is in flight is not lost when the refresh swaps.
"""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta
from typing import Callable

from src.models.cache import CacheSnapshot
from src.models.event import EnrichedEvent
from src.services.event_aggregator import EventAggregator
from src.services.event_enricher import EventEnricher
from src.utils.errors import CacheRefreshError
from src.utils.logging import get_logger


class EventCache:
    """Process-wide holder of the enriched event set.

    Created once in ``main.py`` and shared through ``app.state``.
    """

    def __init__(
        self,
        aggregator: EventAggregator,
        enricher: EventEnricher,
        clock: Callable[[], datetime],
        ttl: timedelta = timedelta(hours=6),
    ) -> None:
        self._aggregator = aggregator
        self._enricher = enricher
        self._clock = clock
        self._ttl = ttl
        self._snapshot = CacheSnapshot()
        self._published: list[EnrichedEvent] = []
        self._refresh_task: asyncio.Task[CacheSnapshot] | None = None
        self._refresh_count = 0
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> CacheSnapshot:
        return self._snapshot

    @property
    def events(self) -> tuple[EnrichedEvent, ...]:
        return self._snapshot.events

    @property
    def last_updated(self) -> datetime | None:
        return self._snapshot.last_updated

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    @property
    def refresh_count(self) -> int:
        """Number of refresh cycles started since process start."""
        return self._refresh_count

    @property
    def is_refreshing(self) -> bool:
        return self._refresh_task is not None and not self._refresh_task.done()

    def is_fresh(self, now: datetime | None = None) -> bool:
        last_updated = self._snapshot.last_updated
        if last_updated is None:
            return False
        now = now or self._clock()
        return now - last_updated < self._ttl

    @property
    def state(self) -> str:
        """``"empty"``, ``"fresh"`` or ``"stale"``."""
        if self._snapshot.is_empty:
            return "empty"
        return "fresh" if self.is_fresh() else "stale"

    def find(self, event_id: str) -> EnrichedEvent | None:
        return next((e for e in self._snapshot.events if e.id == event_id), None)

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    async def ensure_fresh(self) -> CacheSnapshot:
        """Refresh when EMPTY or STALE; otherwise return the current snapshot.

        Raises
        ------
        CacheRefreshError
            If a refresh was needed and failed.
        """
        if self.is_fresh():
            return self._snapshot
        return await self.refresh()

    async def refresh(self) -> CacheSnapshot:
        """Run (or join) a refresh cycle unconditionally.

        ``asyncio.shield`` keeps one caller's cancellation (e.g. a dropped
        HTTP request) from cancelling the cycle the other callers share.

        Raises
        ------
        CacheRefreshError
            If the cycle failed; the previous snapshot is still served.
        """
        if self._refresh_task is None or self._refresh_task.done():
            self._refresh_count += 1
            self._refresh_task = asyncio.create_task(self._run_refresh())
        else:
            self._logger.debug("refresh_joined_in_flight")
        return await asyncio.shield(self._refresh_task)

    async def scheduled_refresh(self) -> None:
        """Timer entry point: refresh, logging instead of raising on failure."""
        try:
            snapshot = await self.refresh()
        except CacheRefreshError as exc:
            self._logger.warning("scheduled_refresh_failed", error=str(exc))
            return
        self._logger.info("scheduled_refresh_complete", count=len(snapshot.events))

    def publish(self, event: EnrichedEvent) -> None:
        """Prepend an approved submission.  ``last_updated`` is unchanged."""
        self._published.insert(0, event)
        self._snapshot = CacheSnapshot(
            events=(event, *self._snapshot.events),
            last_updated=self._snapshot.last_updated,
        )
        self._logger.info("event_published", event_id=event.id, title=event.title)

    def published_events(self) -> list[EnrichedEvent]:
        return list(self._published)

    async def close(self) -> None:
        """Cancel an in-flight refresh (used on application shutdown)."""
        task = self._refresh_task
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except (asyncio.CancelledError, CacheRefreshError):
                pass

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _run_refresh(self) -> CacheSnapshot:
        started = self._clock()
        self._logger.info("cache_refresh_started", state=self.state)
        try:
            raw_events = await self._aggregator.collect()
            enriched = await self._enricher.enrich_all(raw_events)
        except Exception as exc:
            self._logger.error("cache_refresh_failed", error=str(exc))
            raise CacheRefreshError(message=f"Event refresh cycle failed: {exc}") from exc

        # No await between reading _published and assigning the snapshot, so
        # a concurrent publish() lands either before (and is included) or after
        # (and prepends onto the new snapshot).
        snapshot = CacheSnapshot(
            events=(*self._published, *enriched),
            last_updated=self._clock(),
        )
        self._snapshot = snapshot
        self._logger.info(
            "cache_refresh_complete",
            count=len(snapshot.events),
            published=len(self._published),
            seconds=round((snapshot.last_updated - started).total_seconds(), 2),
        )
        return snapshot
