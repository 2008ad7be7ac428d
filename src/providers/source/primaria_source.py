"""Timișoara City Hall (primariatm.ro) official events listing."""

from __future__ import annotations

from datetime import datetime, timedelta

from src.models.event import RawEvent
from src.providers.source.html_source import HtmlEventSource, ListingSelectors


class PrimariaTimisoaraSource(HtmlEventSource):
    """Civic and official events published by the city hall."""

    source_name = "timisoara_official"
    url = "https://www.primariatm.ro/evenimente/"
    default_category = "official"
    selectors = ListingSelectors(
        container='.event, .eveniment, [class*="event"]',
        title='h1, h2, h3, .title, [class*="title"]',
        date='.date, [class*="date"], time',
        location='.location, [class*="location"], .venue',
        description='.description, [class*="description"], p',
    )

    def fallback_events(self, now: datetime) -> list[RawEvent]:
        session = (now + timedelta(days=2)).replace(hour=10, minute=0, second=0, microsecond=0)
        city_day = (now + timedelta(days=30)).replace(hour=9, minute=0, second=0, microsecond=0)
        return [
            RawEvent(
                title="City Council - Public Session",
                date=session,
                location="Timișoara City Hall",
                original_description="Public session of the Timișoara City Council.",
                category="official",
            ),
            RawEvent(
                title="Timișoara City Day",
                date=city_day,
                location="Historic Center",
                original_description="City day celebration with cultural events.",
                category="official",
            ),
        ]
