"""AI-backed event translation via an ILLMProvider."""

from __future__ import annotations

import json

import structlog

from src.interfaces.llm_provider import ILLMProvider
from src.interfaces.translation_provider import ITranslationProvider
from src.models.event import EventTranslation, Language
from src.utils.errors import AIProviderError, TranslationError
from src.utils.llm_json import extract_json_object

logger = structlog.get_logger(logger_name=__name__)

_LANGUAGE_NAMES = {Language.EN: "English", Language.RO: "Romanian"}

_SYSTEM_PROMPT = (
    "You translate event listings for a cultural guide to Timișoara, Romania. "
    "Keep authentic place and venue names as they are (e.g. Piața Unirii). "
    "Respond with a single JSON object and nothing else."
)

_REQUIRED_KEYS = ("title", "description", "location", "ticketPrice")


class LLMTranslationProvider(ITranslationProvider):
    """Translates the four event fields with one LLM call."""

    def __init__(self, llm: ILLMProvider, temperature: float = 0.3, max_tokens: int = 800) -> None:
        self._llm = llm
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def translate(self, fields: EventTranslation, target_language: Language) -> EventTranslation:
        language = Language(target_language)
        prompt = (
            f"Translate this event into {_LANGUAGE_NAMES[language]}.\n"
            f"{json.dumps(fields.model_dump(by_alias=True), ensure_ascii=False)}\n\n"
            'Return JSON with exactly these keys: "title", "description", "location", '
            '"ticketPrice". Use an empty string for ticketPrice if the input has none.'
        )

        try:
            response = await self._llm.complete(
                system_prompt=_SYSTEM_PROMPT,
                user_prompt=prompt,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except AIProviderError as exc:
            raise TranslationError(
                message=f"Translation request failed: {exc.message}",
                provider_name=self.get_provider_name(),
            ) from exc

        try:
            parsed = extract_json_object(response)
        except ValueError as exc:
            raise TranslationError(
                message=f"Unparseable translation response: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        missing = [k for k in _REQUIRED_KEYS if not isinstance(parsed.get(k), str)]
        # An empty ticketPrice is legitimate; empty title/description/location are not.
        empty = [k for k in _REQUIRED_KEYS[:3] if isinstance(parsed.get(k), str) and not parsed[k].strip()]
        if missing or empty:
            raise TranslationError(
                message=f"Translation response missing fields: {', '.join(missing + empty)}",
                provider_name=self.get_provider_name(),
            )

        return EventTranslation(
            title=parsed["title"].strip(),
            description=parsed["description"].strip(),
            location=parsed["location"].strip(),
            ticket_price=parsed["ticketPrice"].strip(),
        )

    def get_provider_name(self) -> str:
        return f"llm:{self._llm.get_provider_name()}"
