"""Integration tests for the FastAPI endpoints using TestClient."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.middleware import ErrorHandlingMiddleware, RequestLoggingMiddleware
from src.api.routes import router as api_router
from src.services.event_service import EventService
from src.utils.errors import CacheRefreshError

SUBMISSION = {
    "title": "Poetry Evening at Bastion",
    "description": (
        "An open poetry and literature evening in the Bastion courtyard, with local poets, "
        "a live jazz trio and a short book fair from the city's independent publishers."
    ),
    "date": "2025-12-20 19:00",
    "location": "Bastionul Theresia, Timișoara",
    "category": "cultural",
    "organizerContact": "poets@bastion.ro",
    "website": "https://bastion.ro",
    "ticketPrice": "Free",
    "tags": "poetry, literature",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _create_test_app(service) -> FastAPI:
    """FastAPI app with the production router and middleware, no lifespan."""
    app = FastAPI()
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(api_router)
    app.state.event_service = service
    return app


@pytest.fixture
def client(build_event_service):
    with TestClient(_create_test_app(build_event_service())) as test_client:
        yield test_client


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------


class TestEventsEndpoint:
    def test_enhanced_listing(self, client) -> None:
        response = client.get("/api/events")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["count"] == 6
        assert body["lastUpdated"] is not None
        first = body["events"][0]
        assert first["title"] == "Jazz Night at Fratelli"
        assert first["enhancedDescription"]
        assert first["aiCategory"] == "music"
        assert first["aiGenerated"] is False
        assert set(first["translations"]) == {"en", "ro"}

    def test_raw_listing(self, client) -> None:
        body = client.get("/api/events", params={"enhanced": "false"}).json()

        assert set(body["events"][0]) == {"id", "title", "date", "location", "originalDescription", "source"}

    def test_category_filter(self, client) -> None:
        body = client.get("/api/events", params={"category": "music"}).json()

        assert body["count"] == 1
        assert body["events"][0]["title"] == "Jazz Night at Fratelli"

    def test_event_by_id(self, client) -> None:
        event_id = client.get("/api/events").json()["events"][1]["id"]

        response = client.get(f"/api/events/{event_id}")

        assert response.status_code == 200
        assert response.json()["title"] == "Art Exhibition - Contemporary Timișoara"

    def test_unknown_event_is_404(self, client) -> None:
        response = client.get("/api/events/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "EventNotFoundError", "detail": "Event not found: nope"}

    def test_manual_refresh(self, client) -> None:
        response = client.post("/api/events/refresh")

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Events refreshed successfully"
        assert body["count"] == 6


class TestRefreshFailure:
    def test_refresh_failure_is_500(self) -> None:
        service = MagicMock(spec=EventService)
        service.refresh_now = AsyncMock(side_effect=CacheRefreshError("every stage failed"))

        with TestClient(_create_test_app(service)) as test_client:
            response = test_client.post("/api/events/refresh")

        assert response.status_code == 500
        assert response.json()["error"] == "CacheRefreshError"


# ---------------------------------------------------------------------------
# Translation
# ---------------------------------------------------------------------------


class TestTranslateEndpoint:
    def test_translates_to_romanian(self, client) -> None:
        events = client.get("/api/events").json()["events"][:2]

        response = client.post("/api/translate-events", json={"events": events, "targetLanguage": "ro"})

        assert response.status_code == 200
        body = response.json()
        assert body["targetLanguage"] == "ro"
        assert [e["id"] for e in body["events"]] == [e["id"] for e in events]
        assert body["events"][0]["translations"]["ro"]["title"] == "Seară de Jazz la Fratelli"

    def test_unsupported_language_is_422(self, client) -> None:
        events = client.get("/api/events").json()["events"][:1]

        response = client.post("/api/translate-events", json={"events": events, "targetLanguage": "fr"})

        assert response.status_code == 422


# ---------------------------------------------------------------------------
# Submissions
# ---------------------------------------------------------------------------


class TestSubmissionEndpoints:
    def test_approved_submission_is_listed(self, client) -> None:
        response = client.post("/api/submit-event", json=SUBMISSION)

        assert response.status_code == 200
        outcome = response.json()
        assert outcome["approved"] is True
        assert outcome["publishedId"]

        listing = client.get("/api/events").json()
        assert listing["count"] == 7
        assert listing["events"][0]["id"] == outcome["publishedId"]
        assert listing["events"][0]["source"] == "user_submission"

        mine = client.get("/api/user-events", params={"email": "POETS@bastion.ro"}).json()
        assert mine["count"] == 1
        assert mine["events"][0]["organizerContact"] == "poets@bastion.ro"

    def test_missing_contact_is_rejected(self, client) -> None:
        payload = {k: v for k, v in SUBMISSION.items() if k != "organizerContact"}

        outcome = client.post("/api/submit-event", json=payload).json()

        assert outcome["approved"] is False
        assert outcome["reason"] == "missing_required_field"
        assert outcome["publishedId"] is None
        assert "organizerContact" in outcome["feedback"]

    def test_null_contact_is_a_structured_rejection(self, client) -> None:
        response = client.post("/api/submit-event", json={**SUBMISSION, "organizerContact": None})

        assert response.status_code == 200
        assert response.json()["reason"] == "missing_required_field"

    def test_user_events_requires_email(self, client) -> None:
        assert client.get("/api/user-events").status_code == 422

    def test_user_events_for_unknown_organizer(self, client) -> None:
        body = client.get("/api/user-events", params={"email": "nobody@example.ro"}).json()

        assert body == {"success": True, "events": [], "count": 0}


class TestHealthEndpoint:
    def test_health(self, client) -> None:
        body = client.get("/api/health").json()

        assert body["status"] == "ok"
        assert body["cacheState"] in {"empty", "fresh"}
        assert "uptimeSeconds" in body
