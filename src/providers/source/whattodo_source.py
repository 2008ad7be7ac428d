"""WhatToDo (whattodo.ro) entertainment listing for Timișoara."""

from __future__ import annotations

from datetime import datetime, timedelta

from src.models.event import RawEvent
from src.providers.source.html_source import HtmlEventSource, ListingSelectors


class WhatToDoSource(HtmlEventSource):
    source_name = "what_to_do"
    url = "https://whattodo.ro/timisoara"
    default_category = "entertainment"
    selectors = ListingSelectors(
        container='.event-item, .card, [class*="event"]',
        title='h2, h3, .event-title, [class*="title"]',
        date='.date, [class*="date"]',
        location='.venue, .location, [class*="location"]',
        description='.description, [class*="desc"]',
    )

    def fallback_events(self, now: datetime) -> list[RawEvent]:
        concert = (now + timedelta(days=4)).replace(hour=21, minute=0, second=0, microsecond=0)
        return [
            RawEvent(
                title="Rock Concert in Old Town",
                date=concert,
                location="Union Square",
                original_description="Rock concert featuring local bands.",
                category="music",
            ),
        ]
