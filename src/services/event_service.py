"""Facade exposed to the route layer.

Route handlers talk only to :class:`EventService`; it coordinates the cache,
the translator and the submission verifier.  Read operations go through
``EventCache.ensure_fresh`` so a cold or stale cache is refreshed on demand.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from src.models.cache import EventListing, HealthStatus, RefreshSummary
from src.models.event import EnrichedEvent, Language
from src.models.submission import SubmissionOutcome, UserSubmission
from src.pipeline.event_cache import EventCache
from src.services.event_translator import EventTranslator
from src.services.submission_verifier import SubmissionVerifier
from src.utils.errors import EventNotFoundError
from src.utils.logging import get_logger


class EventService:
    """Core operations behind the HTTP API."""

    def __init__(
        self,
        cache: EventCache,
        translator: EventTranslator,
        verifier: SubmissionVerifier,
        clock: Callable[[], datetime],
    ) -> None:
        self._cache = cache
        self._translator = translator
        self._verifier = verifier
        self._clock = clock
        self._started_at = clock()
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Listings
    # ------------------------------------------------------------------

    async def get_events(self, category: str | None = None, enhanced: bool = True) -> EventListing:
        """Current events, optionally filtered by category.

        *category* matches either the source's own label or the enriched
        category, case-insensitively.
        """
        snapshot = await self._cache.ensure_fresh()
        events = snapshot.events
        if category:
            wanted = category.strip().lower()
            events = tuple(
                e for e in events if e.category.lower() == wanted or e.ai_category.value == wanted
            )
        return EventListing(
            events=events,
            count=len(events),
            last_updated=snapshot.last_updated,
            enhanced=enhanced,
        )

    async def get_event_by_id(self, event_id: str) -> EnrichedEvent:
        """Raises :class:`EventNotFoundError` when no cached event has *event_id*."""
        await self._cache.ensure_fresh()
        event = self._cache.find(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    async def refresh_now(self) -> RefreshSummary:
        """Unconditional refresh.  Propagates :class:`CacheRefreshError`."""
        snapshot = await self._cache.refresh()
        return RefreshSummary(count=len(snapshot.events), last_updated=snapshot.last_updated)

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    async def translate_events(
        self,
        events: list[EnrichedEvent],
        target_language: Language | str,
    ) -> list[EnrichedEvent]:
        return await self._translator.translate_events(events, target_language)

    # ------------------------------------------------------------------
    # Submissions
    # ------------------------------------------------------------------

    async def submit_event(self, submission: UserSubmission) -> SubmissionOutcome:
        """Verify *submission*; publish it into the cache when approved."""
        result = await self._verifier.verify(submission)
        if not result.approved:
            return SubmissionOutcome(
                approved=False,
                score=result.score,
                feedback=result.feedback,
                suggestions=result.suggestions,
                reason=result.reason,
                reason_detail=result.reason_detail,
            )

        record = self._verifier.build_published_event(submission, result)
        self._cache.publish(record)
        return SubmissionOutcome(
            approved=True,
            score=result.score,
            feedback=result.feedback,
            suggestions=result.suggestions,
            reason_detail=result.reason_detail,
            published_id=record.id,
        )

    def user_events(self, email: str) -> list[EnrichedEvent]:
        """Published submissions whose organizer contact is *email*."""
        wanted = email.strip().lower()
        return [
            e for e in self._cache.published_events()
            if (e.organizer_contact or "").lower() == wanted
        ]

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    def health(self) -> HealthStatus:
        now = self._clock()
        return HealthStatus(
            status="ok",
            timestamp=now,
            uptime_seconds=round((now - self._started_at).total_seconds(), 3),
            cache_state=self._cache.state,
            events_cached=len(self._cache.events),
            last_updated=self._cache.last_updated,
            refreshing=self._cache.is_refreshing,
        )
