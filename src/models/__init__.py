"""artRevolution domain models -- re-exports all public model classes.

Organized by concern:
    - event.py       -- raw / sourced / enriched events, translations, enums
    - submission.py  -- user submissions and moderation outcomes
    - cache.py       -- the immutable cache snapshot
"""

from __future__ import annotations

from src.models.cache import CacheSnapshot, EventListing, HealthStatus, RefreshSummary
from src.models.event import (
    Category,
    Enhancement,
    EnrichedEvent,
    EventTranslation,
    Language,
    Mood,
    RawEvent,
    SourcedEvent,
    TargetAudience,
    coerce_enum,
)
from src.models.submission import (
    RejectionReason,
    SubmissionOutcome,
    UserSubmission,
    VerificationResult,
)

__all__ = [
    "CacheSnapshot",
    "Category",
    "Enhancement",
    "EnrichedEvent",
    "EventListing",
    "EventTranslation",
    "HealthStatus",
    "Language",
    "Mood",
    "RawEvent",
    "RefreshSummary",
    "RejectionReason",
    "SourcedEvent",
    "SubmissionOutcome",
    "TargetAudience",
    "UserSubmission",
    "VerificationResult",
    "coerce_enum",
]
