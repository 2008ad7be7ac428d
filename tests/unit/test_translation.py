"""Unit tests for the translation tiers and the EventTranslator."""

from __future__ import annotations

import json

import pytest

from src.models.event import EnrichedEvent, EventTranslation, Language
from src.providers.translation.llm_provider import LLMTranslationProvider
from src.services.event_translator import EventTranslator, source_fields
from src.utils.errors import AIProviderError, TranslationError

AI_TRANSLATION = {
    "title": "Seară de jazz la Fratelli",
    "description": "O seară de jazz live.",
    "location": "Fratelli Studios",
    "ticketPrice": "50 RON",
}


@pytest.fixture
def enriched_event(make_sourced_event, rule_strategy, clock) -> EnrichedEvent:
    sourced = make_sourced_event()
    return EnrichedEvent.from_sourced(
        sourced,
        rule_strategy.build(sourced).model_copy(update={"translations": {}}),
        ai_generated=False,
        enhanced_at=clock.now,
    )


# ======================================================================
# DictionaryTranslationProvider
# ======================================================================


class TestDictionaryTranslation:
    def test_title_to_romanian(self, dictionary) -> None:
        assert dictionary.translate_text("Jazz Night at Fratelli", Language.RO) == "Seară de Jazz la Fratelli"

    def test_title_back_to_english(self, dictionary) -> None:
        assert dictionary.translate_text("Seară de Jazz la Fratelli", Language.EN) == "Jazz Night at Fratelli"

    def test_phrases_and_connectives(self, dictionary) -> None:
        assert dictionary.translate_text("Meetup at Bastion", Language.RO) == "Întâlnire la Bastion"

    def test_leading_case_is_preserved(self, dictionary) -> None:
        assert dictionary.translate_text("jazz night", Language.RO) == "seară de Jazz"

    def test_venue_names_use_exact_map(self, dictionary) -> None:
        assert dictionary.translate_location("Piața Unirii", Language.EN) == "Union Square"
        assert dictionary.translate_location("union square", Language.RO) == "Piața Unirii"

    def test_prices(self, dictionary) -> None:
        assert dictionary.translate_price("Free entry", Language.RO) == "Intrare liberă"
        assert dictionary.translate_price("Gratuit", Language.EN) == "Free"
        assert dictionary.translate_price("from 30 RON", Language.RO) == "de la 30 RON"
        assert dictionary.translate_price(None, Language.RO) == ""

    def test_unknown_text_unchanged(self, dictionary) -> None:
        assert dictionary.translate_text("Fratelli", Language.RO) == "Fratelli"

    @pytest.mark.asyncio
    async def test_translate_is_deterministic(self, dictionary) -> None:
        fields = EventTranslation(title="Art Exhibition", description="Annual show", location="Art Museum")
        first = await dictionary.translate(fields, Language.RO)
        second = await dictionary.translate(fields, Language.RO)

        assert first == second
        assert first.title == "Expoziție de Artă"
        assert first.location == "Muzeul de Artă"


# ======================================================================
# LLMTranslationProvider
# ======================================================================


class TestLLMTranslationProvider:
    @pytest.mark.asyncio
    async def test_parses_all_fields(self, make_llm) -> None:
        provider = LLMTranslationProvider(make_llm(response=json.dumps(AI_TRANSLATION)))

        result = await provider.translate(EventTranslation(title="t", description="d", location="l"), Language.RO)

        assert result.title == "Seară de jazz la Fratelli"
        assert result.ticket_price == "50 RON"
        assert provider.get_provider_name() == "llm:gemini"

    @pytest.mark.asyncio
    async def test_empty_ticket_price_is_accepted(self, make_llm) -> None:
        provider = LLMTranslationProvider(make_llm(response=json.dumps({**AI_TRANSLATION, "ticketPrice": ""})))

        result = await provider.translate(EventTranslation(title="t", description="d", location="l"), Language.RO)

        assert result.ticket_price == ""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            "no json here",
            json.dumps({**AI_TRANSLATION, "title": "  "}),
            json.dumps({k: v for k, v in AI_TRANSLATION.items() if k != "ticketPrice"}),
            json.dumps({**AI_TRANSLATION, "location": None}),
        ],
    )
    async def test_incomplete_response_raises(self, make_llm, response) -> None:
        provider = LLMTranslationProvider(make_llm(response=response))

        with pytest.raises(TranslationError):
            await provider.translate(EventTranslation(title="t", description="d", location="l"), Language.RO)

    @pytest.mark.asyncio
    async def test_provider_error_becomes_translation_error(self, make_llm) -> None:
        llm = make_llm(side_effect=AIProviderError("timeout", provider_name="gemini"))

        with pytest.raises(TranslationError):
            await LLMTranslationProvider(llm).translate(
                EventTranslation(title="t", description="d", location="l"), Language.EN
            )


# ======================================================================
# EventTranslator
# ======================================================================


class TestEventTranslator:
    def test_source_fields_prefer_enhanced_description(self, enriched_event) -> None:
        fields = source_fields(enriched_event)
        assert fields.description == enriched_event.enhanced_description
        assert fields.ticket_price == "50 RON"

    def test_source_fields_of_plain_event(self, make_sourced_event) -> None:
        event = make_sourced_event()
        assert source_fields(event).description == event.original_description

    @pytest.mark.asyncio
    async def test_dictionary_used_without_providers(self, dictionary, enriched_event) -> None:
        translation = await EventTranslator([], dictionary).translate(enriched_event, "ro")

        assert translation.title == "Seară de Jazz la Fratelli"
        assert translation.location == "Fratelli Studios"

    @pytest.mark.asyncio
    async def test_ai_translation_is_cached(self, dictionary, make_llm, enriched_event) -> None:
        llm = make_llm(response=json.dumps(AI_TRANSLATION))
        translator = EventTranslator([LLMTranslationProvider(llm)], dictionary)

        first = await translator.translate(enriched_event, Language.RO)
        second = await translator.translate(enriched_event, Language.RO)

        assert first == second
        assert first.description == "O seară de jazz live."
        assert llm.complete.await_count == 1

    @pytest.mark.asyncio
    async def test_ai_failure_falls_back_to_dictionary(self, dictionary, make_llm, enriched_event) -> None:
        llm = make_llm(response="not json")
        translator = EventTranslator([LLMTranslationProvider(llm)], dictionary)

        translation = await translator.translate(enriched_event, Language.RO)
        await translator.translate(enriched_event, Language.RO)

        assert translation.title == "Seară de Jazz la Fratelli"
        # Dictionary results are not memoised, so the AI tier is retried.
        assert llm.complete.await_count == 2

    @pytest.mark.asyncio
    async def test_unsupported_language_rejected(self, dictionary, enriched_event) -> None:
        with pytest.raises(ValueError):
            await EventTranslator([], dictionary).translate(enriched_event, "fr")

    @pytest.mark.asyncio
    async def test_translate_events_returns_copies_in_order(
        self, dictionary, enriched_event, make_sourced_event, rule_strategy, clock
    ) -> None:
        other_sourced = make_sourced_event(title="Art Exhibition", days=2)
        other = EnrichedEvent.from_sourced(
            other_sourced, rule_strategy.build(other_sourced), ai_generated=False, enhanced_at=clock.now
        )
        events = [enriched_event, other]

        translated = await EventTranslator([], dictionary).translate_events(events, "ro")

        assert [e.id for e in translated] == [e.id for e in events]
        assert translated[0].translations["ro"].title == "Seară de Jazz la Fratelli"
        assert translated[1].translations["ro"].title == "Expoziție de Artă"
        assert "ro" not in enriched_event.translations
        assert translated[0] is not enriched_event

    @pytest.mark.asyncio
    async def test_round_trip_keeps_shape(self, dictionary, enriched_event) -> None:
        translator = EventTranslator([], dictionary)
        await translator.translate(enriched_event, Language.RO)

        again = await translator.translate(enriched_event, Language.EN)
        direct = await EventTranslator([], dictionary).translate(enriched_event, Language.EN)

        assert set(again.model_dump()) == set(direct.model_dump())
        assert again == direct
