"""Curated feed of recurring Timișoara cultural events.

Stands in for venues that publish no machine-readable listing.  Dates are
relative to the aggregator's clock so the feed always looks upcoming.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable

import structlog

from src.interfaces.event_source import IEventSource
from src.models.event import RawEvent

logger = structlog.get_logger(logger_name=__name__)

# (title, days_from_now, hour, minute, location, description, category, link, price)
_LOCAL_EVENTS: tuple[tuple[str, int, int, int, str, str, str, str, str], ...] = (
    (
        "Jazz Night at Fratelli", 1, 20, 30, "Fratelli Studios",
        "Live jazz performance featuring local and international artists.",
        "music", "https://www.fratelli.ro/evenimente", "50 RON",
    ),
    (
        "Art Exhibition - Contemporary Timișoara", 3, 10, 0, "Muzeul de Artă",
        "Showcasing modern art from local Timișoara artists.",
        "exhibition", "https://www.muzeuart-tm.ro/expozitii", "15 RON",
    ),
    (
        "Food Festival - Banat Flavors", 5, 12, 0, "Piața Victoriei",
        "Traditional Banat cuisine festival with local restaurants.",
        "food", "https://www.primariatm.ro/evenimente/festival-banat", "Free entry",
    ),
    (
        "Theater Performance - Hamlet", 7, 19, 30, "Teatrul Național",
        "Classic Shakespearean play in Romanian.",
        "theatre", "https://www.tnts.ro/spectacole/hamlet", "30-80 RON",
    ),
    (
        "Tech Meetup - Web Development", 10, 18, 0, "UVT Campus",
        "Monthly meetup for web developers in Timișoara.",
        "technology", "https://www.meetup.com/timisoara-web-dev", "Free",
    ),
    (
        "Christmas Market Opening", 14, 10, 0, "Piața Unirii",
        "Annual Christmas market with local crafts and food.",
        "cultural", "https://www.primariatm.ro/targul-de-craciun", "Free entry",
    ),
)


class LocalEventsSource(IEventSource):
    """Static source; never touches the network."""

    def __init__(self, clock: Callable[[], datetime]) -> None:
        self._clock = clock

    async def fetch(self) -> list[RawEvent]:
        now = self._clock()
        events = [
            RawEvent(
                title=title,
                date=(now + timedelta(days=days)).replace(
                    hour=hour, minute=minute, second=0, microsecond=0
                ),
                location=location,
                original_description=description,
                category=category,
                visit_source=link,
                ticket_price=price,
            )
            for title, days, hour, minute, location, description, category, link, price in _LOCAL_EVENTS
        ]
        logger.info("source_fetched", source=self.get_source_name(), count=len(events))
        return events

    def get_source_name(self) -> str:
        return "local_events"
