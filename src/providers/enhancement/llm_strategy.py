"""LLM-backed enhancement strategy.

One instance wraps one ILLMProvider; the enricher's chain holds one
instance per configured provider (Gemini, then Ollama).

Any provider error or unusable response surfaces as
:class:`~src.utils.errors.AIProviderError` so the enricher can move on to
the next tier.  Partial responses are never returned: the description must
be present, unknown enum values collapse to their defaults, and any
translation the model omitted or garbled is filled in by the dictionary.
"""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import ValidationError

from src.interfaces.enhancement_strategy import IEnhancementStrategy
from src.interfaces.llm_provider import ILLMProvider
from src.models.event import (
    Category,
    Enhancement,
    EventTranslation,
    Language,
    Mood,
    SourcedEvent,
    TargetAudience,
)
from src.providers.translation.dictionary_provider import DictionaryTranslationProvider
from src.utils.errors import AIProviderError
from src.utils.llm_json import extract_json_object
from src.utils.text_normalizer import normalize_tags

logger = structlog.get_logger(logger_name=__name__)

_MAX_TAGS = 5

_SYSTEM_PROMPT = (
    "You are a cultural events curator for Timișoara, Romania (European Capital "
    "of Culture 2023). You write engaging, accurate event descriptions and "
    "classify events. Respond with a single JSON object and nothing else."
)


def _choices(enum_cls: type) -> str:
    return ", ".join(member.value for member in enum_cls if member.value != "neutral")


class LLMEnhancementStrategy(IEnhancementStrategy):
    """Ask an LLM for description, classification, tags and translations."""

    def __init__(
        self,
        llm: ILLMProvider,
        dictionary: DictionaryTranslationProvider,
        temperature: float = 0.7,
        max_tokens: int = 1000,
    ) -> None:
        self._llm = llm
        self._dictionary = dictionary
        self._temperature = temperature
        self._max_tokens = max_tokens

    # ------------------------------------------------------------------
    # IEnhancementStrategy implementation
    # ------------------------------------------------------------------

    async def enhance(self, event: SourcedEvent) -> Enhancement:
        response = await self._llm.complete(
            system_prompt=_SYSTEM_PROMPT,
            user_prompt=self._build_prompt(event),
            temperature=self._temperature,
            max_tokens=self._max_tokens,
        )
        try:
            return self._parse_response(event, response)
        except (ValueError, ValidationError) as exc:
            raise AIProviderError(
                message=f"Failed to parse AI response: {exc}",
                provider_name=self._llm.get_provider_name(),
            ) from exc

    def get_strategy_name(self) -> str:
        return self._llm.get_provider_name()

    @property
    def is_ai(self) -> bool:
        return True

    # ------------------------------------------------------------------
    # Prompt / response handling
    # ------------------------------------------------------------------

    @staticmethod
    def _build_prompt(event: SourcedEvent) -> str:
        return (
            "Enhance this event for the Timișoara cultural guide.\n\n"
            f"Title: {event.title}\n"
            f"Date: {event.date.isoformat()}\n"
            f"Location: {event.location}\n"
            f"Original description: {event.original_description or '(none)'}\n"
            f"Source category: {event.category or '(none)'}\n\n"
            "Return JSON with these keys:\n"
            '1. "description": 2-3 engaging sentences in English\n'
            f'2. "category": one of [{_choices(Category)}]\n'
            '3. "tags": 3-5 short lowercase tags\n'
            f'4. "mood": one of [{_choices(Mood)}]\n'
            f'5. "targetAudience": one of [{_choices(TargetAudience)}]\n'
            '6. "translations": {"ro": {...}, "en": {...}}, each with "title", '
            '"description", "location", "ticketPrice" (keep venue names authentic)\n'
        )

    def _parse_response(self, event: SourcedEvent, response: str) -> Enhancement:
        parsed = extract_json_object(response)

        description = parsed.get("description")
        if not isinstance(description, str) or not description.strip():
            raise ValueError("AI response has no description")
        description = description.strip()

        raw_tags = parsed.get("tags")
        tags = normalize_tags(raw_tags if isinstance(raw_tags, (list, str)) else None, limit=_MAX_TAGS)

        return Enhancement(
            description=description,
            category=parsed.get("category"),
            tags=tags,
            mood=parsed.get("mood"),
            target_audience=parsed.get("targetAudience", parsed.get("target_audience")),
            translations=self._translations(event, description, parsed.get("translations")),
            provider=self._llm.get_provider_name(),
        )

    def _translations(self, event: SourcedEvent, description: str, raw: Any) -> dict[str, EventTranslation]:
        raw = raw if isinstance(raw, dict) else {}
        source_fields = EventTranslation(
            title=event.title,
            description=description,
            location=event.location,
            ticket_price=event.ticket_price or "",
        )

        translations: dict[str, EventTranslation] = {}
        for language in Language:
            candidate = _translation_from(raw.get(language.value))
            if candidate is None:
                logger.debug(
                    "ai_translation_missing_using_dictionary",
                    language=language.value,
                    title=event.title,
                )
                candidate = self._dictionary.translate_fields(source_fields, language)
            translations[language.value] = candidate
        return translations


def _translation_from(raw: Any) -> EventTranslation | None:
    if not isinstance(raw, dict):
        return None
    title, description, location = raw.get("title"), raw.get("description"), raw.get("location")
    if not all(isinstance(v, str) and v.strip() for v in (title, description, location)):
        return None
    price = raw.get("ticketPrice", raw.get("ticket_price", ""))
    return EventTranslation(
        title=title.strip(),
        description=description.strip(),
        location=location.strip(),
        ticket_price=price.strip() if isinstance(price, str) else "",
    )
