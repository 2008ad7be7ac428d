"""End-to-end tests: scraped and static sources through enrichment, cache,
submission and translation, with the HTTP layer and the LLM mocked."""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone

import httpx
import pytest
import pytest_asyncio

from src.models.submission import UserSubmission
from src.providers.source.local_events_source import LocalEventsSource
from src.providers.source.primaria_source import PrimariaTimisoaraSource
from src.providers.source.whattodo_source import WhatToDoSource
from src.utils.errors import AIProviderError

from conftest import FakeSource

PRIMARIA_PAGE = """
<html><body>
  <div class="event">
    <h3>JAZZ NIGHT AT FRATELLI</h3>
    <span class="date">02.12.2025 20:30</span>
    <span class="location">Fratelli Studios</span>
    <p class="description">Seară de jazz cu artiști locali.</p>
  </div>
  <div class="event">
    <h3>Consiliul Local - Ședință Publică</h3>
    <span class="date">04.12.2025 10:00</span>
    <span class="location">Primăria Timișoara</span>
  </div>
</body></html>
"""


def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.host.endswith("primariatm.ro"):
        return httpx.Response(200, text=PRIMARIA_PAGE)
    return httpx.Response(503, text="maintenance")


def _title_in(prompt: str) -> str:
    match = re.search(r"^Title: (.*)$", prompt, re.MULTILINE)
    return match.group(1) if match else ""


async def _scripted_llm(system_prompt: str, user_prompt: str, temperature: float, max_tokens: int) -> str:
    if user_prompt.startswith("Enhance this event"):
        title = _title_in(user_prompt)
        if title.startswith("Rock"):
            return "I'd rather not."
        return json.dumps(
            {
                "description": f"AI description for {title}.",
                "category": "cultural",
                "tags": ["timisoara", "culture"],
                "mood": "festive",
                "targetAudience": "general",
            }
        )
    if user_prompt.startswith("Score this event submission"):
        return json.dumps(
            {
                "approved": True,
                "score": 88,
                "reason": "Local choir concert",
                "feedback": "Welcome addition.",
                "suggestions": ["Add the programme"],
            }
        )
    if user_prompt.startswith("Translate this event"):
        return json.dumps(
            {
                "title": "Titlu tradus",
                "description": "Descriere tradusă.",
                "location": "Piața Unirii",
                "ticketPrice": "",
            }
        )
    raise AIProviderError("unexpected prompt", provider_name="gemini")


@pytest_asyncio.fixture
async def http_client():
    async with httpx.AsyncClient(transport=httpx.MockTransport(_handler)) as client:
        yield client


@pytest.fixture
def sources(http_client, clock):
    return [
        PrimariaTimisoaraSource(http_client=http_client, tz=timezone.utc, clock=clock),
        WhatToDoSource(http_client=http_client, tz=timezone.utc, clock=clock),
        FakeSource("broken_feed", error=RuntimeError("adapter bug")),
        LocalEventsSource(clock=clock),
    ]


class TestAggregationToCache:
    @pytest.mark.asyncio
    async def test_full_cycle_without_ai(self, build_event_service, sources, clock) -> None:
        service = build_event_service(sources=sources)

        listing = await service.get_events()

        # 2 scraped + 1 fallback + 6 local - 1 cross-source duplicate
        assert listing.count == 8
        dates = [e.date for e in listing.events]
        assert dates == sorted(dates)
        assert listing.last_updated == clock.now
        jazz = listing.events[0]
        assert jazz.title == "JAZZ NIGHT AT FRATELLI"
        assert jazz.source == "timisoara_official"
        assert {e.source for e in listing.events} == {"timisoara_official", "what_to_do", "local_events"}
        assert all(not e.ai_generated and e.enhancement_error is None for e in listing.events)

    @pytest.mark.asyncio
    async def test_full_cycle_with_ai_and_per_event_fallback(
        self, build_event_service, sources, make_llm
    ) -> None:
        llm = make_llm(side_effect=_scripted_llm)
        service = build_event_service(sources=sources, llms=[llm])

        listing = await service.get_events()

        rock = next(e for e in listing.events if e.title == "Rock Concert in Old Town")
        others = [e for e in listing.events if e is not rock]
        assert rock.ai_generated is False
        assert "gemini" in rock.enhancement_error
        assert rock.ai_category.value == "music"
        assert all(e.ai_generated for e in others)
        assert all(e.enhanced_description.startswith("AI description for") for e in others)
        assert all(set(e.translations) == {"en", "ro"} for e in listing.events)

    @pytest.mark.asyncio
    async def test_second_read_is_served_from_cache(self, build_event_service, sources, clock) -> None:
        service = build_event_service(sources=sources)
        await service.get_events()
        clock.advance(hours=1)

        await service.get_events()

        assert sources[2].calls == 1
        assert service.health().cache_state == "fresh"


class TestSubmissionAndTranslation:
    @pytest.mark.asyncio
    async def test_ai_approved_submission_lands_in_listing(self, build_event_service, sources, make_llm) -> None:
        service = build_event_service(sources=sources, llms=[make_llm(side_effect=_scripted_llm)])
        submission = UserSubmission.model_validate(
            {
                "title": "Winter Choir Concert",
                "description": "The city youth choir performs traditional Banat carols in Piața Unirii.",
                "date": "2025-12-21",
                "location": "Piața Unirii, Timișoara",
                "category": "music",
                "organizerContact": "choir@tm.ro",
            }
        )

        outcome = await service.submit_event(submission)
        listing = await service.get_events()

        assert outcome.approved is True
        assert outcome.score == 88
        assert outcome.reason_detail == "Local choir concert"
        assert outcome.suggestions == ["Add the programme"]
        published = listing.events[0]
        assert published.id == outcome.published_id
        assert published.ai_approved is True
        assert published.date == datetime(2025, 12, 21, tzinfo=timezone.utc)
        assert service.user_events("choir@tm.ro") == [published]

    @pytest.mark.asyncio
    async def test_ai_translation_then_dictionary_when_ai_breaks(
        self, build_event_service, sources, make_llm
    ) -> None:
        llm = make_llm(side_effect=_scripted_llm)
        service = build_event_service(sources=sources, llms=[llm])
        events = list((await service.get_events()).events[:2])

        translated = await service.translate_events(events, "ro")
        assert all(e.translations["ro"].title == "Titlu tradus" for e in translated)

        llm.complete.side_effect = AIProviderError("quota exceeded", provider_name="gemini")
        fresh_event = events[0].model_copy(update={"enhanced_description": "A different description."})
        fallback = await service.translate_events([fresh_event], "ro")

        assert fallback[0].translations["ro"].title != "Titlu tradus"
        assert events[0].translations["ro"].title != "Titlu tradus"


class TestThreeSourceScenario:
    @pytest.mark.asyncio
    async def test_two_plus_failed_plus_one_with_ai_down(
        self, build_event_service, make_raw_event, make_llm
    ) -> None:
        sources = [
            FakeSource("timisoara_official", [make_raw_event("City Day", days=4), make_raw_event("Hamlet", days=2)]),
            FakeSource("what_to_do", error=TimeoutError("read timed out")),
            FakeSource("local_events", [make_raw_event("Banat Food Festival", days=3)]),
        ]
        llms = [
            make_llm("gemini", side_effect=AIProviderError("quota exceeded", provider_name="gemini")),
            make_llm("ollama", side_effect=AIProviderError("connection refused", provider_name="ollama")),
        ]
        service = build_event_service(sources=sources, llms=llms)

        listing = await service.get_events()

        assert [e.title for e in listing.events] == ["Hamlet", "Banat Food Festival", "City Day"]
        assert len({e.id for e in listing.events}) == 3
        assert all(e.ai_generated is False for e in listing.events)
        assert all(e.enhanced_description for e in listing.events)
        assert all("ollama" in e.enhancement_error for e in listing.events)
