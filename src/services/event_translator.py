"""On-demand event translation (AI first, dictionary fallback).

The translator never returns a partial result: AI tiers either yield all
four fields or fail, and the dictionary tier cannot fail.  Input events are
never mutated; :meth:`EventTranslator.translate_events` returns copies with
``translations[<lang>]`` merged in.

Successful AI translations are memoised in a ``cachetools.TTLCache`` keyed
by language and source text, so re-translating an unchanged event does not
cost another model call.
"""

from __future__ import annotations

import asyncio

from cachetools import TTLCache

from src.interfaces.translation_provider import ITranslationProvider
from src.models.event import EnrichedEvent, EventTranslation, Language, SourcedEvent
from src.providers.translation.dictionary_provider import DictionaryTranslationProvider
from src.utils.concurrency import throttled_gather
from src.utils.logging import get_logger

_DEFAULT_TIMEOUT = 30.0
_MAX_CONCURRENT = 5


def source_fields(event: SourcedEvent) -> EventTranslation:
    """The four translatable fields as they appear on the event itself."""
    description = getattr(event, "enhanced_description", "") or event.original_description
    return EventTranslation(
        title=event.title,
        description=description,
        location=event.location,
        ticket_price=event.ticket_price or "",
    )


class EventTranslator:
    """Translates events into one of the supported languages."""

    def __init__(
        self,
        providers: list[ITranslationProvider],
        fallback: DictionaryTranslationProvider,
        timeout_seconds: float = _DEFAULT_TIMEOUT,
        cache_size: int = 512,
        cache_ttl: float = 6 * 3600,
    ) -> None:
        self._providers = list(providers)
        self._fallback = fallback
        self._timeout = timeout_seconds
        self._cache: TTLCache[tuple[str, EventTranslation], EventTranslation] = TTLCache(
            maxsize=cache_size, ttl=cache_ttl
        )
        self._semaphore = asyncio.Semaphore(_MAX_CONCURRENT)
        self._logger = get_logger(__name__)

    async def translate(self, event: SourcedEvent, target_language: Language | str) -> EventTranslation:
        """Translate *event* into *target_language*.

        Raises
        ------
        ValueError
            If *target_language* is not ``"en"`` or ``"ro"``.
        """
        language = Language(target_language)
        fields = source_fields(event)

        cache_key = (language.value, fields)
        cached = self._cache.get(cache_key)
        if cached is not None:
            self._logger.debug("translation_cache_hit", event_id=event.id, language=language.value)
            return cached

        for provider in self._providers:
            name = provider.get_provider_name()
            try:
                translation = await asyncio.wait_for(
                    provider.translate(fields, language), timeout=self._timeout
                )
            except asyncio.TimeoutError:
                self._logger.warning("translation_provider_timeout", provider=name, event_id=event.id)
            except Exception as exc:
                self._logger.warning(
                    "translation_provider_failed",
                    provider=name,
                    event_id=event.id,
                    error=str(exc),
                )
            else:
                self._cache[cache_key] = translation
                return translation

        return self._fallback.translate_fields(fields, language)

    async def translate_events(
        self,
        events: list[EnrichedEvent],
        target_language: Language | str,
    ) -> list[EnrichedEvent]:
        """Return copies of *events* with ``translations[target_language]`` set."""
        language = Language(target_language)
        results = await throttled_gather(
            [self.translate(event, language) for event in events],
            semaphore=self._semaphore,
            return_exceptions=False,
        )
        self._logger.info("events_translated", count=len(events), language=language.value)
        return [event.with_translation(language.value, t) for event, t in zip(events, results)]
