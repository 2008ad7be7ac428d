"""Deterministic dictionary-based translation between English and Romanian.

Substitution is a single regex pass per field: all phrase keys are joined
into one alternation sorted longest-first, anchored on word boundaries and
matched case-insensitively.  Because replacement happens in one pass, a
substituted phrase is never re-translated ("at" -> "la" cannot turn back
into "at").

Locations are looked up in an exact venue map before falling back to
phrase substitution; ticket prices use their own small table.
"""

from __future__ import annotations

import re
from typing import Iterable

import structlog

from src.config.translation_dictionary import LOCATIONS, PHRASES, PRICES
from src.interfaces.translation_provider import ITranslationProvider
from src.models.event import EventTranslation, Language

logger = structlog.get_logger(logger_name=__name__)


def _match_case(source: str, replacement: str) -> str:
    # Only the first letter's case is carried over; the rest of the
    # replacement keeps the dictionary's own casing.
    if not source or not replacement:
        return replacement
    if source[0].isupper():
        return replacement[0].upper() + replacement[1:]
    if source[0].islower():
        return replacement[0].lower() + replacement[1:]
    return replacement


class PhraseTable:
    """Case-insensitive, longest-match-first phrase substitution."""

    def __init__(self, pairs: Iterable[tuple[str, str]]) -> None:
        mapping: dict[str, str] = {}
        for source, target in pairs:
            mapping.setdefault(source.lower(), target)
        self._mapping = mapping

        keys = sorted(mapping, key=len, reverse=True)
        if keys:
            alternation = "|".join(re.escape(k) for k in keys)
            self._pattern: re.Pattern[str] | None = re.compile(
                rf"(?<!\w)(?:{alternation})(?!\w)", re.IGNORECASE
            )
        else:
            self._pattern = None

    def __len__(self) -> int:
        return len(self._mapping)

    def lookup(self, text: str) -> str | None:
        """Exact whole-string lookup, or ``None``."""
        return self._mapping.get(text.strip().lower())

    def substitute(self, text: str) -> str:
        if not text or self._pattern is None:
            return text
        return self._pattern.sub(self._replace, text)

    def _replace(self, match: re.Match[str]) -> str:
        found = match.group(0)
        return _match_case(found, self._mapping[found.lower()])


def _inverted(pairs: Iterable[tuple[str, str]]) -> list[tuple[str, str]]:
    return [(target, source) for source, target in pairs]


class DictionaryTranslationProvider(ITranslationProvider):
    """Fallback translator that never fails.

    Tables are built once; repeated calls with the same input always return
    the same output.
    """

    def __init__(
        self,
        phrases: Iterable[tuple[str, str]] = PHRASES,
        locations: Iterable[tuple[str, str]] = LOCATIONS,
        prices: Iterable[tuple[str, str]] = PRICES,
    ) -> None:
        phrases, locations, prices = list(phrases), list(locations), list(prices)
        # {target language: table translating INTO that language}
        self._phrases = {Language.RO: PhraseTable(phrases), Language.EN: PhraseTable(_inverted(phrases))}
        self._locations = {
            Language.RO: PhraseTable(locations),
            Language.EN: PhraseTable(_inverted(locations)),
        }
        self._prices = {Language.RO: PhraseTable(prices), Language.EN: PhraseTable(_inverted(prices))}
        logger.debug(
            "translation_dictionary_loaded",
            phrases=len(phrases),
            locations=len(locations),
            prices=len(prices),
        )

    # ------------------------------------------------------------------
    # ITranslationProvider implementation
    # ------------------------------------------------------------------

    async def translate(self, fields: EventTranslation, target_language: Language) -> EventTranslation:
        return self.translate_fields(fields, target_language)

    def get_provider_name(self) -> str:
        return "dictionary"

    # ------------------------------------------------------------------
    # Synchronous helpers (also used by the rule-based enhancer)
    # ------------------------------------------------------------------

    def translate_fields(self, fields: EventTranslation, target_language: Language) -> EventTranslation:
        language = Language(target_language)
        return EventTranslation(
            title=self.translate_text(fields.title, language),
            description=self.translate_text(fields.description, language),
            location=self.translate_location(fields.location, language),
            ticket_price=self.translate_price(fields.ticket_price, language),
        )

    def translate_text(self, text: str, target_language: Language) -> str:
        return self._phrases[Language(target_language)].substitute(text)

    def translate_location(self, location: str, target_language: Language) -> str:
        language = Language(target_language)
        exact = self._locations[language].lookup(location)
        if exact is not None:
            return exact
        return self._phrases[language].substitute(location)

    def translate_price(self, price: str | None, target_language: Language) -> str:
        if not price:
            return ""
        return self._prices[Language(target_language)].substitute(price)
