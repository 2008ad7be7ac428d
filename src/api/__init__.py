"""artRevolution API layer: routes, schemas and middleware."""

from src.api.middleware import ErrorHandlingMiddleware, RequestLoggingMiddleware
from src.api.routes import router
from src.api.schemas import (
    ErrorResponse,
    EventListResponse,
    RefreshResponse,
    TranslateEventsRequest,
    TranslateEventsResponse,
    UserEventsResponse,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "router",
    "ErrorResponse",
    "EventListResponse",
    "RefreshResponse",
    "TranslateEventsRequest",
    "TranslateEventsResponse",
    "UserEventsResponse",
]
