"""Deterministic keyword-driven enhancement strategy.

The last tier of every enrichment chain.  Given the same event it always
produces the same :class:`Enhancement`, never raises, and never touches the
network.

Decision order:

    1. category / mood / audience / starting tags -- first CATEGORY_RULES
       entry matching the title, then the description, else entertainment
    2. tags += location tags (squares -> outdoor, museums -> indoor) +
       whole-word keyword tags + base tags, de-duplicated, capped
    3. description per language = category template
       + original description (only when it is *not* already written in
         that language and is long enough to be worth repeating)
       + fixed location sentence
"""

from __future__ import annotations

from src.config.domain_knowledge import (
    BASE_TAGS,
    DEFAULT_TEMPLATE,
    DESCRIPTION_TEMPLATES,
    KEYWORD_TAGS,
    LOCATION_SENTENCE,
    LOCATION_TAGS,
    MAX_TAGS,
    MIN_APPENDED_DESCRIPTION,
    find_keywords,
    find_words,
    match_category_rule,
)
from src.interfaces.enhancement_strategy import IEnhancementStrategy
from src.models.event import Category, Enhancement, EventTranslation, Language, SourcedEvent
from src.providers.translation.dictionary_provider import DictionaryTranslationProvider
from src.utils.text_normalizer import detect_language, fold, normalize_tags, normalize_whitespace


class RuleBasedEnhancementStrategy(IEnhancementStrategy):
    """Keyword tables + templates.  Translations come from the dictionary."""

    def __init__(
        self,
        dictionary: DictionaryTranslationProvider,
        languages: tuple[Language, ...] = (Language.EN, Language.RO),
    ) -> None:
        self._dictionary = dictionary
        self._languages = languages

    # ------------------------------------------------------------------
    # IEnhancementStrategy implementation
    # ------------------------------------------------------------------

    async def enhance(self, event: SourcedEvent) -> Enhancement:
        return self.build(event)

    def get_strategy_name(self) -> str:
        return "rule_based"

    @property
    def is_ai(self) -> bool:
        return False

    # ------------------------------------------------------------------
    # Deterministic core
    # ------------------------------------------------------------------

    def build(self, event: SourcedEvent) -> Enhancement:
        folded_title = fold(event.title)
        folded_description = fold(event.original_description)
        rule = match_category_rule(folded_title, folded_description)

        return Enhancement(
            description=self.describe(event, rule.category, Language.EN),
            category=rule.category,
            tags=self._tags(event, rule.tags, folded_title, folded_description),
            mood=rule.mood,
            target_audience=rule.audience,
            translations={
                language.value: self._translation(event, rule.category, language)
                for language in self._languages
            },
            provider=self.get_strategy_name(),
        )

    def describe(self, event: SourcedEvent, category: Category, language: Language) -> str:
        lang = Language(language).value
        template = DESCRIPTION_TEMPLATES.get(category, DEFAULT_TEMPLATE)[lang]
        parts = [template]

        original = normalize_whitespace(event.original_description)
        if len(original) > MIN_APPENDED_DESCRIPTION and detect_language(original) != lang:
            parts.append(original)

        location = event.location
        if language == Language.RO:
            location = self._dictionary.translate_location(location, Language.RO)
        parts.append(LOCATION_SENTENCE[lang].format(location=location))
        return " ".join(parts)

    def _tags(
        self,
        event: SourcedEvent,
        category_tags: tuple[str, ...],
        folded_title: str,
        folded_description: str,
    ) -> list[str]:
        folded_location = fold(event.location)
        tags: list[str] = list(category_tags)

        for needles, location_tags in LOCATION_TAGS:
            if find_keywords(folded_location, needles):
                tags.extend(location_tags)

        scanned = " ".join((folded_title, folded_description, fold(event.ticket_price or "")))
        tags.extend(KEYWORD_TAGS[word] for word in find_words(scanned, tuple(KEYWORD_TAGS)))
        tags.extend(BASE_TAGS)
        return normalize_tags(tags, limit=MAX_TAGS)

    def _translation(self, event: SourcedEvent, category: Category, language: Language) -> EventTranslation:
        return EventTranslation(
            title=self._dictionary.translate_text(event.title, language),
            description=self.describe(event, category, language),
            location=self._dictionary.translate_location(event.location, language),
            ticket_price=self._dictionary.translate_price(event.ticket_price, language),
        )
