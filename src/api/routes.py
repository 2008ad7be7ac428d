"""FastAPI routes for artRevolution.

Endpoint                    Method  Description
--------------------------  ------  ------------------------------------------
/api/events                 GET     Cached events (``category``, ``enhanced``)
/api/events/{event_id}      GET     One cached event, 404 when unknown
/api/events/refresh         POST    Force an aggregation + enrichment cycle
/api/translate-events       POST    Translate events to ``en`` or ``ro``
/api/submit-event           POST    Verify and publish a user submission
/api/user-events            GET     Published submissions for an organizer
/api/health                 GET     Liveness plus cache state

Handlers stay thin: every operation is delegated to :class:`EventService`,
which is resolved from ``app.state`` through ``Annotated`` + ``Depends``.
"""

from __future__ import annotations

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Query, Request

from src.api.schemas import (
    EventListResponse,
    RefreshResponse,
    TranslateEventsRequest,
    TranslateEventsResponse,
    UserEventsResponse,
)
from src.models.cache import HealthStatus
from src.models.event import EnrichedEvent
from src.models.submission import SubmissionOutcome, UserSubmission
from src.services.event_service import EventService
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api")


def _get_event_service(request: Request) -> EventService:
    return request.app.state.event_service


EventServiceDep = Annotated[EventService, Depends(_get_event_service)]


@router.get("/events", response_model=EventListResponse, response_model_by_alias=True)
async def list_events(
    service: EventServiceDep,
    category: Annotated[str | None, Query()] = None,
    enhanced: Annotated[bool, Query()] = True,
) -> EventListResponse:
    listing = await service.get_events(category=category, enhanced=enhanced)
    if enhanced:
        payload = [e.model_dump(mode="json", by_alias=True) for e in listing.events]
    else:
        payload = [e.raw_view() for e in listing.events]
    return EventListResponse(
        events=payload,
        count=listing.count,
        last_updated=listing.last_updated,
    )


@router.post("/events/refresh", response_model=RefreshResponse)
async def refresh_events(service: EventServiceDep) -> RefreshResponse:
    summary = await service.refresh_now()
    _logger.info("manual_refresh_completed", count=summary.count)
    return RefreshResponse(
        message="Events refreshed successfully",
        count=summary.count,
        last_updated=summary.last_updated,
    )


@router.get("/events/{event_id}", response_model=EnrichedEvent)
async def get_event(event_id: str, service: EventServiceDep) -> EnrichedEvent:
    return await service.get_event_by_id(event_id)


@router.post("/translate-events", response_model=TranslateEventsResponse)
async def translate_events(
    body: TranslateEventsRequest,
    service: EventServiceDep,
) -> TranslateEventsResponse:
    translated = await service.translate_events(body.events, body.target_language)
    return TranslateEventsResponse(events=translated, target_language=body.target_language)


@router.post("/submit-event", response_model=SubmissionOutcome)
async def submit_event(
    submission: UserSubmission,
    service: EventServiceDep,
) -> SubmissionOutcome:
    return await service.submit_event(submission)


@router.get("/user-events", response_model=UserEventsResponse)
async def user_events(
    service: EventServiceDep,
    email: Annotated[str, Query(min_length=1)],
) -> UserEventsResponse:
    events = service.user_events(email)
    return UserEventsResponse(events=events, count=len(events))


@router.get("/health", response_model=HealthStatus)
async def health(service: EventServiceDep) -> HealthStatus:
    return service.health()
