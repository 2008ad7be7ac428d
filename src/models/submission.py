"""Models for user-submitted events and their moderation outcome.

A :class:`UserSubmission` is transient: it is validated, scored and either
turned into a published :class:`~src.models.event.EnrichedEvent` or
answered with a rejection.  Every field defaults to empty so that missing
input is reported by the verifier as ``missing_required_field`` rather than
by a generic schema error.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from src.utils.text_normalizer import normalize_tags

_WIRE_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class RejectionReason(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    """Why a submission was not published.

    Everything except ``LOW_QUALITY`` is decided by basic validation before
    any AI call is made.
    """

    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVALID_EMAIL = "invalid_email"
    INVALID_DATE = "invalid_date"
    PAST_DATE = "past_date"
    OUT_OF_AREA = "out_of_area"
    TITLE_TOO_SHORT = "title_too_short"
    DESCRIPTION_TOO_SHORT = "description_too_short"
    LOW_QUALITY = "low_quality"


class UserSubmission(BaseModel):
    """An event proposed by an organizer through the submission form."""

    model_config = _WIRE_CONFIG

    title: str = ""
    description: str = ""
    date: str = ""
    location: str = ""
    category: str = ""
    organizer_contact: str = ""
    website: str | None = None
    ticket_price: str | None = None
    image: str | None = None
    tags: list[str] = Field(default_factory=list)

    @field_validator("title", "description", "date", "location", "category", "organizer_contact", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value: Any) -> list[str]:
        return normalize_tags(value)


class VerificationResult(BaseModel):
    """Score and feedback for one submission.

    ``scored_by`` names who decided: ``"validation"`` for basic-check
    rejections, an AI provider name, or ``"rule_based"``.  ``reason_detail``
    holds the AI moderator's own one-line reason, when there was one.
    """

    model_config = _WIRE_CONFIG

    approved: bool
    score: int = Field(ge=0, le=100)
    feedback: str
    suggestions: list[str] = Field(default_factory=list)
    reason: RejectionReason | None = None
    reason_detail: str | None = None
    scored_by: str = "rule_based"


class SubmissionOutcome(BaseModel):
    """What the route layer returns to the organizer."""

    model_config = _WIRE_CONFIG

    approved: bool
    score: int
    feedback: str
    suggestions: list[str] = Field(default_factory=list)
    reason: RejectionReason | None = None
    reason_detail: str | None = None
    published_id: str | None = None
