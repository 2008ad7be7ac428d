"""Cache snapshot and the read-side result shapes built from it.

The cache swaps whole snapshots, so ``events`` and ``last_updated`` are
always observed together.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.models.event import EnrichedEvent

_WIRE_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class CacheSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    events: tuple[EnrichedEvent, ...] = Field(default_factory=tuple)
    last_updated: datetime | None = None

    @property
    def is_empty(self) -> bool:
        """``True`` until the first refresh completes."""
        return self.last_updated is None


class EventListing(BaseModel):
    """Result of ``EventService.get_events``."""

    model_config = _WIRE_CONFIG

    events: tuple[EnrichedEvent, ...]
    count: int
    last_updated: datetime | None = None
    enhanced: bool = True


class RefreshSummary(BaseModel):
    model_config = _WIRE_CONFIG

    count: int
    last_updated: datetime | None = None


class HealthStatus(BaseModel):
    model_config = _WIRE_CONFIG

    status: str
    timestamp: datetime
    uptime_seconds: float
    cache_state: str
    events_cached: int
    last_updated: datetime | None = None
    refreshing: bool = False
