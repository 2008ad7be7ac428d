"""Abstract base class for event listing sources.

A source adapter turns one origin (a scraped website, a static feed) into a
list of :class:`~src.models.event.RawEvent`.  Adapters own their failure
handling: operational errors (network, parsing) are logged inside the adapter
and answered with a fallback list, never raised.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.event import RawEvent


# Concrete implementations: PrimariaTimisoaraSource, WhatToDoSource, LocalEventsSource
# Located in: src/providers/source/
class IEventSource(ABC):
    """Contract for a single event origin."""

    @abstractmethod
    async def fetch(self) -> list[RawEvent]:
        """Return the origin's current listings.

        Must not raise for network or parse failures; return the adapter's
        fallback events (possibly an empty list) instead.
        """

    @abstractmethod
    def get_source_name(self) -> str:
        """Stable machine name stamped on every event, e.g. ``"what_to_do"``."""
