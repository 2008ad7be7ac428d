"""Event source adapters (implementations of IEventSource)."""

from src.providers.source.html_source import HtmlEventSource, ListingSelectors
from src.providers.source.local_events_source import LocalEventsSource
from src.providers.source.primaria_source import PrimariaTimisoaraSource
from src.providers.source.whattodo_source import WhatToDoSource

__all__ = [
    "HtmlEventSource",
    "ListingSelectors",
    "LocalEventsSource",
    "PrimariaTimisoaraSource",
    "WhatToDoSource",
]
