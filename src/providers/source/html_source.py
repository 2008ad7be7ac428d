"""Shared base for event sources that scrape an HTML listing page.

Subclasses declare a URL, CSS selectors and a fallback event set; this base
class handles fetching (httpx), parsing (BeautifulSoup) and the failure
policy: any network or parse failure is logged and answered with the
fallback set, so a broken site never aborts aggregation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Callable

import httpx
import structlog
from bs4 import BeautifulSoup, Tag

from src.interfaces.event_source import IEventSource
from src.models.event import RawEvent
from src.utils.date_parsing import parse_event_date
from src.utils.errors import SourceFetchError
from src.utils.text_normalizer import normalize_whitespace

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_TIMEOUT = 10.0
_DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; artRevolution/0.1; +https://artrevolution.ro)",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "ro-RO,ro;q=0.9,en;q=0.8",
}

DEFAULT_LOCATION = "Timișoara"


@dataclass(frozen=True)
class ListingSelectors:
    """CSS selectors locating one listing card and its fields."""

    container: str
    title: str
    date: str
    location: str
    description: str


def select_text(element: Tag, selector: str) -> str:
    """Text of the first element matching *selector*, or ``""`` when absent."""
    found = element.select_one(selector)
    if found is None:
        return ""
    return normalize_whitespace(found.get_text(" ", strip=True))


class HtmlEventSource(IEventSource):
    """Event source backed by one scraped HTML page.

    The ``httpx.AsyncClient`` is injected so all sources share one
    connection pool and tests can pass a mock.
    """

    source_name: str = ""
    url: str = ""
    selectors: ListingSelectors
    default_category: str = ""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        tz: tzinfo,
        clock: Callable[[], datetime],
        url: str | None = None,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._http = http_client
        self._tz = tz
        self._clock = clock
        self._url = url or self.url
        self._timeout = timeout

    # ------------------------------------------------------------------
    # IEventSource implementation
    # ------------------------------------------------------------------

    async def fetch(self) -> list[RawEvent]:
        now = self._clock()
        try:
            html = await self._fetch_page()
            events = self._parse_listing(html, now)
        except SourceFetchError as exc:
            logger.warning(
                "source_fetch_failed_using_fallback",
                source=self.get_source_name(),
                error=str(exc),
            )
            return self.fallback_events(now)

        logger.info("source_fetched", source=self.get_source_name(), count=len(events))
        return events

    def get_source_name(self) -> str:
        return self.source_name

    # ------------------------------------------------------------------
    # Subclass hooks
    # ------------------------------------------------------------------

    def fallback_events(self, now: datetime) -> list[RawEvent]:
        """Static events served when the page cannot be fetched or parsed."""
        return []

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _fetch_page(self) -> str:
        try:
            response = await self._http.get(
                self._url,
                headers=_DEFAULT_HEADERS,
                timeout=self._timeout,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise SourceFetchError(
                message=f"Timeout fetching {self._url}: {exc}",
                provider_name=self.get_source_name(),
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise SourceFetchError(
                message=f"HTTP {exc.response.status_code} for {self._url}",
                provider_name=self.get_source_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise SourceFetchError(
                message=f"HTTP error fetching {self._url}: {exc}",
                provider_name=self.get_source_name(),
            ) from exc
        return response.text

    def _parse_listing(self, html: str, now: datetime) -> list[RawEvent]:
        try:
            soup = BeautifulSoup(html, "html.parser")
            cards = soup.select(self.selectors.container)
        except (ValueError, TypeError) as exc:
            raise SourceFetchError(
                message=f"Could not parse listing page: {exc}",
                provider_name=self.get_source_name(),
            ) from exc

        events: list[RawEvent] = []
        for card in cards:
            try:
                event = self._parse_card(card, now)
            except (ValueError, AttributeError) as exc:
                logger.warning(
                    "source_card_parse_failed",
                    source=self.get_source_name(),
                    error=str(exc),
                )
                continue
            if event is not None:
                events.append(event)
        return events

    def _parse_card(self, card: Tag, now: datetime) -> RawEvent | None:
        title = select_text(card, self.selectors.title)
        date_text = select_text(card, self.selectors.date)
        # Cards without both a title and a date are layout noise.
        if not title or not date_text:
            return None

        return RawEvent(
            title=title,
            date=parse_event_date(date_text, self._tz, now),
            location=select_text(card, self.selectors.location) or DEFAULT_LOCATION,
            original_description=select_text(card, self.selectors.description),
            category=self.default_category,
            visit_source=self._url,
        )
