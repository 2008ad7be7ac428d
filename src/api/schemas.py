"""Pydantic request/response schemas for the artRevolution API.

Field names are snake_case in Python and camelCase on the wire, matching
the domain models in ``src.models``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.models.event import EnrichedEvent, Language

_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None


class EventListResponse(BaseModel):
    """Response for ``GET /api/events``.

    ``events`` holds either full enriched records or the raw listing view,
    depending on the ``enhanced`` query flag.
    """

    model_config = _WIRE_CONFIG

    success: bool = True
    events: list[dict[str, Any]] = Field(default_factory=list)
    count: int = 0
    last_updated: datetime | None = None


class RefreshResponse(BaseModel):
    model_config = _WIRE_CONFIG

    success: bool = True
    message: str
    count: int
    last_updated: datetime | None = None


class TranslateEventsRequest(BaseModel):
    """Body of ``POST /api/translate-events``.

    Unsupported languages are rejected by validation before any event is
    touched.
    """

    model_config = _WIRE_CONFIG

    events: list[EnrichedEvent] = Field(default_factory=list)
    target_language: Language


class TranslateEventsResponse(BaseModel):
    model_config = _WIRE_CONFIG

    success: bool = True
    events: list[EnrichedEvent] = Field(default_factory=list)
    target_language: Language


class UserEventsResponse(BaseModel):
    model_config = _WIRE_CONFIG

    success: bool = True
    events: list[EnrichedEvent] = Field(default_factory=list)
    count: int = 0
