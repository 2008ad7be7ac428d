"""Batched event enrichment with a per-event fallback chain.

Architecture: Fallback Chain
----------------------------
Each event is offered to the AI strategies in priority order (Gemini, then
Ollama).  Every attempt is bounded by ``timeout_seconds``; a timeout, a
provider error or an unparseable response all count as a failure of that
tier and the next one is tried.  When every AI tier has failed (or none is
configured) the deterministic rule-based strategy produces the record and
``ai_generated`` is ``False``.

Batching
--------
Events are processed ``batch_size`` at a time.  Within a batch all events
run concurrently; ``asyncio.gather`` returns results in argument order, so
output index *i* always belongs to input index *i* regardless of which
call finished first.  The rate limiter is acquired once per batch, which
spaces batches out for upstream rate limits.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Callable

from src.interfaces.enhancement_strategy import IEnhancementStrategy
from src.models.event import EnrichedEvent, SourcedEvent
from src.providers.enhancement.rule_based import RuleBasedEnhancementStrategy
from src.utils.concurrency import IntervalRateLimiter
from src.utils.errors import EnhancementError
from src.utils.logging import get_logger

_DEFAULT_BATCH_SIZE = 5
_DEFAULT_TIMEOUT = 30.0


class EventEnricher:
    """Turns SourcedEvents into EnrichedEvents."""

    def __init__(
        self,
        strategies: list[IEnhancementStrategy],
        fallback: RuleBasedEnhancementStrategy,
        clock: Callable[[], datetime],
        rate_limiter: IntervalRateLimiter | None = None,
        batch_size: int = _DEFAULT_BATCH_SIZE,
        timeout_seconds: float = _DEFAULT_TIMEOUT,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        self._strategies = list(strategies)
        self._fallback = fallback
        self._clock = clock
        self._rate_limiter = rate_limiter or IntervalRateLimiter(0)
        self._batch_size = batch_size
        self._timeout = timeout_seconds
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def enrich_all(
        self,
        events: list[SourcedEvent],
        batch_size: int | None = None,
    ) -> list[EnrichedEvent]:
        """Enrich *events*, returning one record per input in input order."""
        size = batch_size or self._batch_size
        if size < 1:
            raise ValueError("batch_size must be >= 1")

        enriched: list[EnrichedEvent] = []
        for start in range(0, len(events), size):
            batch = events[start : start + size]
            await self._rate_limiter.acquire()
            results = await asyncio.gather(*(self.enhance(event) for event in batch))
            enriched.extend(results)
            self._logger.info(
                "enrichment_batch_complete",
                batch=start // size + 1,
                size=len(batch),
                ai_generated=sum(1 for r in results if r.ai_generated),
            )

        return enriched

    async def enhance(self, event: SourcedEvent) -> EnrichedEvent:
        """Enrich one event.  Never raises for provider failures."""
        failures: list[str] = []

        for strategy in self._strategies:
            name = strategy.get_strategy_name()
            try:
                enhancement = await asyncio.wait_for(strategy.enhance(event), timeout=self._timeout)
            except asyncio.TimeoutError:
                failures.append(f"{name}: timed out after {self._timeout}s")
                self._logger.warning("enhancement_tier_timeout", strategy=name, event_id=event.id)
            except Exception as exc:
                # Any tier failure is non-fatal; the next tier gets the event.
                failures.append(f"{name}: {exc}")
                self._logger.warning(
                    "enhancement_tier_failed",
                    strategy=name,
                    event_id=event.id,
                    error=str(exc),
                )
            else:
                return EnrichedEvent.from_sourced(
                    event,
                    enhancement,
                    ai_generated=strategy.is_ai,
                    enhanced_at=self._clock(),
                )

        error = EnhancementError("; ".join(failures), provider_name="enricher") if failures else None
        return EnrichedEvent.from_sourced(
            event,
            self._fallback.build(event),
            ai_generated=False,
            enhanced_at=self._clock(),
            enhancement_error=error.message if error else None,
        )
