"""Unit tests for text normalization, date parsing, JSON extraction and concurrency helpers."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from src.utils.concurrency import IntervalRateLimiter, throttled_gather
from src.utils.date_parsing import parse_event_date, tomorrow
from src.utils.llm_json import extract_json_object
from src.utils.text_normalizer import (
    detect_language,
    fold,
    normalize_tags,
    normalize_whitespace,
    strip_diacritics,
)

NOW = datetime(2025, 12, 1, 12, 0, tzinfo=timezone.utc)


# ======================================================================
# text_normalizer
# ======================================================================


class TestTextNormalizer:
    def test_normalize_whitespace(self) -> None:
        assert normalize_whitespace("  Jazz \n\t Night  ") == "Jazz Night"

    def test_strip_diacritics_comma_and_cedilla_variants(self) -> None:
        assert strip_diacritics("Timișoara") == "Timisoara"
        assert strip_diacritics("Timişoara") == "Timisoara"
        assert strip_diacritics("Piața Unirii") == "Piata Unirii"

    def test_fold_lowercases_and_strips(self) -> None:
        assert fold("  PIAȚA   Victoriei ") == "piata victoriei"

    def test_detect_language_diacritics_mean_romanian(self) -> None:
        assert detect_language("Seară de jazz în centrul orașului") == "ro"

    def test_detect_language_english_text(self) -> None:
        assert detect_language("Live jazz performance featuring local and international artists.") == "en"

    def test_detect_language_romanian_without_diacritics(self) -> None:
        assert detect_language("Concert pentru copii la teatru si dans") == "ro"

    def test_detect_language_empty_defaults_to_english(self) -> None:
        assert detect_language("") == "en"

    def test_normalize_tags_from_string(self) -> None:
        assert normalize_tags("Jazz, live ,jazz, ") == ["jazz", "live"]

    def test_normalize_tags_from_list_with_limit(self) -> None:
        assert normalize_tags(["A", "b", "C", "d"], limit=2) == ["a", "b"]

    def test_normalize_tags_none(self) -> None:
        assert normalize_tags(None) == []


# ======================================================================
# date_parsing
# ======================================================================


class TestParseEventDate:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("15-12-2025", datetime(2025, 12, 15, tzinfo=timezone.utc)),
            ("15/12/2025 19:30", datetime(2025, 12, 15, 19, 30, tzinfo=timezone.utc)),
            ("2025-12-15", datetime(2025, 12, 15, tzinfo=timezone.utc)),
            ("2025/12/15 18:00", datetime(2025, 12, 15, 18, 0, tzinfo=timezone.utc)),
            ("15.12.2025, 18:00", datetime(2025, 12, 15, 18, 0, tzinfo=timezone.utc)),
        ],
    )
    def test_known_formats(self, text: str, expected: datetime) -> None:
        assert parse_event_date(text, timezone.utc, NOW) == expected

    def test_dotted_date_is_not_read_as_time(self) -> None:
        result = parse_event_date("Luni, 15.12.2025", timezone.utc, NOW)
        assert (result.hour, result.minute) == (0, 0)

    def test_generic_parse_via_dateutil(self) -> None:
        result = parse_event_date("December 20, 2025 8pm", timezone.utc, NOW)
        assert result == datetime(2025, 12, 20, 20, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize("text", ["", "   ", None, "to be announced"])
    def test_unparseable_falls_back_to_tomorrow(self, text: str | None) -> None:
        assert parse_event_date(text, timezone.utc, NOW) == NOW + timedelta(days=1)

    def test_result_is_always_aware(self) -> None:
        tz = timezone(timedelta(hours=2))
        result = parse_event_date("2025-12-15", tz, NOW)
        assert result.tzinfo is tz

    def test_tomorrow(self) -> None:
        assert tomorrow(NOW) == datetime(2025, 12, 2, 12, 0, tzinfo=timezone.utc)


# ======================================================================
# llm_json
# ======================================================================


class TestExtractJsonObject:
    def test_plain_object(self) -> None:
        assert extract_json_object('{"a": 1}') == {"a": 1}

    def test_fenced_block(self) -> None:
        assert extract_json_object('```json\n{"score": 80}\n```') == {"score": 80}

    def test_chatty_wrapper(self) -> None:
        response = 'Sure! Here is the result: {"category": "music"} Hope it helps.'
        assert extract_json_object(response) == {"category": "music"}

    def test_no_object_raises(self) -> None:
        with pytest.raises(ValueError):
            extract_json_object("I cannot help with that.")

    def test_array_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            extract_json_object("[1, 2, 3]")

    def test_broken_json_raises(self) -> None:
        with pytest.raises(ValueError):
            extract_json_object('{"description": "unterminated}')


# ======================================================================
# concurrency
# ======================================================================


class TestThrottledGather:
    @pytest.mark.asyncio
    async def test_preserves_order_and_returns_exceptions(self) -> None:
        async def ok(value: int, delay: float) -> int:
            await asyncio.sleep(delay)
            return value

        async def boom() -> int:
            raise RuntimeError("boom")

        results = await throttled_gather([ok(1, 0.02), boom(), ok(3, 0.0)])

        assert results[0] == 1
        assert isinstance(results[1], RuntimeError)
        assert results[2] == 3

    @pytest.mark.asyncio
    async def test_semaphore_bounds_concurrency(self) -> None:
        running = 0
        peak = 0

        async def work() -> None:
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.01)
            running -= 1

        await throttled_gather([work() for _ in range(6)], semaphore=asyncio.Semaphore(2))
        assert peak == 2


class TestIntervalRateLimiter:
    @pytest.mark.asyncio
    async def test_first_acquire_never_waits(self) -> None:
        sleep = AsyncMock()
        limiter = IntervalRateLimiter(1.0, clock=lambda: 0.0, sleep=sleep)
        await limiter.acquire()
        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_waits_for_remaining_interval(self) -> None:
        now = [0.0]
        sleep = AsyncMock()
        limiter = IntervalRateLimiter(1.0, clock=lambda: now[0], sleep=sleep)

        await limiter.acquire()
        now[0] = 0.25
        await limiter.acquire()

        sleep.assert_awaited_once()
        assert sleep.await_args.args[0] == pytest.approx(0.75)

    @pytest.mark.asyncio
    async def test_no_wait_once_interval_elapsed(self) -> None:
        now = [0.0]
        sleep = AsyncMock()
        limiter = IntervalRateLimiter(1.0, clock=lambda: now[0], sleep=sleep)

        await limiter.acquire()
        now[0] = 5.0
        await limiter.acquire()

        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reset_skips_next_wait(self) -> None:
        sleep = AsyncMock()
        limiter = IntervalRateLimiter(1.0, clock=lambda: 0.0, sleep=sleep)

        await limiter.acquire()
        limiter.reset()
        await limiter.acquire()

        sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_zero_interval_never_sleeps(self) -> None:
        sleep = AsyncMock()
        limiter = IntervalRateLimiter(0, clock=lambda: 0.0, sleep=sleep)
        for _ in range(3):
            await limiter.acquire()
        sleep.assert_not_awaited()

    def test_negative_interval_rejected(self) -> None:
        with pytest.raises(ValueError):
            IntervalRateLimiter(-1)
