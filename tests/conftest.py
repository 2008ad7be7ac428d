"""Shared pytest fixtures for the artRevolution test suite."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.interfaces.event_source import IEventSource
from src.interfaces.llm_provider import ILLMProvider
from src.models.event import RawEvent, SourcedEvent
from src.pipeline.event_cache import EventCache
from src.providers.enhancement.llm_strategy import LLMEnhancementStrategy
from src.providers.enhancement.rule_based import RuleBasedEnhancementStrategy
from src.providers.source.local_events_source import LocalEventsSource
from src.providers.translation.dictionary_provider import DictionaryTranslationProvider
from src.providers.translation.llm_provider import LLMTranslationProvider
from src.services.event_aggregator import EventAggregator, generate_event_id
from src.services.event_enricher import EventEnricher
from src.services.event_service import EventService
from src.services.event_translator import EventTranslator
from src.services.submission_verifier import SubmissionVerifier
from src.utils.concurrency import IntervalRateLimiter

FIXED_NOW = datetime(2025, 12, 1, 12, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class FakeClock:
    """Callable clock whose reading only changes when a test advances it."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class FakeSource(IEventSource):
    """In-memory event source.  ``error`` makes ``fetch`` raise."""

    def __init__(
        self,
        name: str,
        events: list[RawEvent] | None = None,
        error: Exception | None = None,
    ) -> None:
        self._name = name
        self._events = list(events or [])
        self._error = error
        self.calls = 0

    async def fetch(self) -> list[RawEvent]:
        self.calls += 1
        if self._error is not None:
            raise self._error
        return list(self._events)

    def get_source_name(self) -> str:
        return self._name


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def dictionary() -> DictionaryTranslationProvider:
    return DictionaryTranslationProvider()


@pytest.fixture
def rule_strategy(dictionary: DictionaryTranslationProvider) -> RuleBasedEnhancementStrategy:
    return RuleBasedEnhancementStrategy(dictionary=dictionary)


@pytest.fixture
def make_raw_event() -> Callable[..., RawEvent]:
    """Factory for RawEvent with sensible Timisoara defaults."""

    def _make(
        title: str = "Jazz Night at Fratelli",
        days: int = 1,
        location: str = "Fratelli Studios",
        description: str = "Live jazz performance featuring local and international artists.",
        category: str = "music",
        ticket_price: str | None = "50 RON",
    ) -> RawEvent:
        return RawEvent(
            title=title,
            date=(FIXED_NOW + timedelta(days=days)).replace(hour=20, minute=30),
            location=location,
            original_description=description,
            category=category,
            ticket_price=ticket_price,
        )

    return _make


@pytest.fixture
def make_sourced_event(make_raw_event: Callable[..., RawEvent]) -> Callable[..., SourcedEvent]:
    """Factory for SourcedEvent stamped as the aggregator would."""

    def _make(source: str = "local_events", **raw_kwargs: Any) -> SourcedEvent:
        raw = make_raw_event(**raw_kwargs)
        return SourcedEvent.from_raw(
            raw,
            event_id=generate_event_id(source, raw.title, raw.date, raw.location),
            source=source,
            fetched_at=FIXED_NOW,
        )

    return _make


@pytest.fixture
def make_llm() -> Callable[..., MagicMock]:
    """Factory for ILLMProvider mocks.

    ``response`` is returned by ``complete``; ``side_effect`` (an exception,
    a list of results or a coroutine function) overrides it.
    """

    def _make(name: str = "gemini", response: str | None = None, side_effect: Any = None) -> MagicMock:
        llm = MagicMock(spec=ILLMProvider)
        llm.complete = AsyncMock(return_value=response, side_effect=side_effect)
        llm.get_provider_name.return_value = name
        llm.is_available.return_value = True
        return llm

    return _make


@pytest.fixture
def build_event_service(clock, dictionary, rule_strategy) -> Callable[..., EventService]:
    """Assemble the real service stack over in-memory sources.

    Defaults to the curated local feed, no AI providers and no batch delay.
    """

    def _build(
        sources: list[IEventSource] | None = None,
        llms: list[ILLMProvider] | None = None,
    ) -> EventService:
        llms = llms or []
        aggregator = EventAggregator(sources=sources or [LocalEventsSource(clock=clock)], clock=clock)
        enricher = EventEnricher(
            strategies=[LLMEnhancementStrategy(llm=llm, dictionary=dictionary) for llm in llms],
            fallback=rule_strategy,
            clock=clock,
            rate_limiter=IntervalRateLimiter(0),
        )
        cache = EventCache(aggregator=aggregator, enricher=enricher, clock=clock)
        translator = EventTranslator(
            providers=[LLMTranslationProvider(llm=llm) for llm in llms],
            fallback=dictionary,
        )
        verifier = SubmissionVerifier(
            llm_providers=llms,
            rule_strategy=rule_strategy,
            dictionary=dictionary,
            clock=clock,
            tz=timezone.utc,
        )
        return EventService(cache=cache, translator=translator, verifier=verifier, clock=clock)

    return _build
