"""Multi-source event aggregation.

Fans out to every registered :class:`IEventSource`, stamps provenance on
each listing, removes duplicates and sorts chronologically.

Failure policy
--------------
Sources are expected to recover from their own network and parse errors.
Anything that still escapes an adapter is caught here as well, and that
source simply contributes nothing to the cycle.  ``collect()`` never
raises; its worst case is an empty list.

Determinism
-----------
Sources may finish in any order, but results are merged in registration
order, so "first occurrence wins" during de-duplication does not depend on
network timing.
"""

from __future__ import annotations

import hashlib
from datetime import datetime
from typing import Callable

from src.interfaces.event_source import IEventSource
from src.models.event import RawEvent, SourcedEvent
from src.utils.concurrency import throttled_gather
from src.utils.logging import get_logger

_ID_LENGTH = 16


def generate_event_id(source: str, title: str, date: datetime, location: str) -> str:
    """Stable identifier for one listing from one source.

    The same ``(source, title, date, location)`` always yields the same id;
    any difference in those fields yields a different one.
    """
    base = f"{source}-{title}-{date.isoformat()}-{location}"
    return hashlib.sha256(base.encode("utf-8")).hexdigest()[:_ID_LENGTH]


def duplicate_key(event: RawEvent) -> tuple[str, datetime, str]:
    """Events with equal keys are the same event.

    Only case is folded; whitespace and punctuation variants ("Jazz Night"
    vs "Jazz Night!") are deliberately treated as distinct events.
    """
    return (event.title.lower(), event.date, event.location.lower())


def remove_duplicates(events: list[SourcedEvent]) -> list[SourcedEvent]:
    """Drop later events whose :func:`duplicate_key` was already seen."""
    seen: set[tuple[str, datetime, str]] = set()
    unique: list[SourcedEvent] = []
    for event in events:
        key = duplicate_key(event)
        if key in seen:
            continue
        seen.add(key)
        unique.append(event)
    return unique


def sort_by_date(events: list[SourcedEvent]) -> list[SourcedEvent]:
    """Ascending by date; stable, so equal dates keep merge order."""
    return sorted(events, key=lambda e: e.date)


class EventAggregator:
    """Collects the canonical raw event set from all sources."""

    def __init__(self, sources: list[IEventSource], clock: Callable[[], datetime]) -> None:
        self._sources = list(sources)
        self._clock = clock
        self._logger = get_logger(__name__)

    @property
    def source_names(self) -> list[str]:
        return [s.get_source_name() for s in self._sources]

    async def collect(self) -> list[SourcedEvent]:
        """Fetch every source and return de-duplicated, date-sorted events."""
        results = await throttled_gather([s.fetch() for s in self._sources], return_exceptions=True)
        fetched_at = self._clock()

        merged: list[SourcedEvent] = []
        for source, result in zip(self._sources, results):
            name = source.get_source_name()
            if isinstance(result, BaseException):
                self._logger.warning("source_failed", source=name, error=str(result))
                continue

            sourced = [self._stamp(raw, name, fetched_at) for raw in result]
            self._logger.info("source_collected", source=name, count=len(sourced))
            merged.extend(sourced)

        unique = sort_by_date(remove_duplicates(merged))
        self._logger.info(
            "aggregation_complete",
            sources=len(self._sources),
            fetched=len(merged),
            unique=len(unique),
        )
        return unique

    @staticmethod
    def _stamp(raw: RawEvent, source: str, fetched_at: datetime) -> SourcedEvent:
        return SourcedEvent.from_raw(
            raw,
            event_id=generate_event_id(source, raw.title, raw.date, raw.location),
            source=source,
            fetched_at=fetched_at,
        )
