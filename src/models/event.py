"""Event domain models: raw listings, provenance, enrichment and translations.

An event moves through three shapes on its way to the cache:

    RawEvent       -- what a source adapter scraped or synthesized
    SourcedEvent   -- + stable id, source name, fetch timestamp (Aggregator)
    EnrichedEvent  -- + description, category, mood, audience, tags,
                      translations and enrichment bookkeeping (Enricher)

All models are frozen.  "Augmenting" an event always means building a new
instance (``EnrichedEvent.from_sourced`` / ``model_copy(update=...)``).

Field names are snake_case in Python and camelCase on the wire
(``original_description`` <-> ``originalDescription``), so JSON produced by
``model_dump(by_alias=True)`` matches what the frontend reads.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Enums -- closed vocabularies validated at the enrichment boundary.
# ---------------------------------------------------------------------------

class Category(str, Enum):  # noqa: UP042 -- StrEnum requires Python 3.11+
    """Event category assigned by enrichment.

    Anything an AI provider invents outside this set collapses to
    ``ENTERTAINMENT``.
    """

    MUSIC = "music"
    ART = "art"
    THEATER = "theater"
    FOOD = "food"
    TECHNOLOGY = "technology"
    CULTURAL = "cultural"
    OFFICIAL = "official"
    ENTERTAINMENT = "entertainment"
    SPORTS = "sports"
    EDUCATION = "education"
    FAMILY = "family"


class Mood(str, Enum):  # noqa: UP042
    ENERGETIC = "energetic"
    RELAXED = "relaxed"
    PROFESSIONAL = "professional"
    FESTIVE = "festive"
    INTIMATE = "intimate"
    EDUCATIONAL = "educational"
    NEUTRAL = "neutral"


class TargetAudience(str, Enum):  # noqa: UP042
    FAMILIES = "families"
    YOUNG_ADULTS = "young_adults"
    PROFESSIONALS = "professionals"
    ARTISTS = "artists"
    GENERAL = "general"
    CHILDREN = "children"
    SENIORS = "seniors"


class Language(str, Enum):  # noqa: UP042
    """Languages the translator supports.  Closed set."""

    EN = "en"
    RO = "ro"


def coerce_enum(enum_cls: type[Enum], value: Any, default: Enum) -> Enum:
    """Map *value* onto *enum_cls* case-insensitively, or return *default*."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        candidate = value.strip().lower().replace(" ", "_").replace("-", "_")
        for member in enum_cls:
            if member.value == candidate:
                return member
    return default


def _ensure_aware(value: datetime) -> datetime:
    # Naive timestamps are interpreted as UTC so comparisons never mix kinds.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ---------------------------------------------------------------------------
# Pipeline shapes
# ---------------------------------------------------------------------------

class RawEvent(BaseModel):
    """A single listing as produced by a source adapter.

    ``category`` is the source's own coarse label ("exhibition", "theatre",
    "official" ...) and is not validated against :class:`Category`.
    """

    model_config = _WIRE_CONFIG

    title: str
    date: datetime
    location: str
    original_description: str = ""
    category: str = ""
    visit_source: str | None = None
    ticket_price: str | None = None

    @field_validator("date")
    @classmethod
    def _aware_date(cls, value: datetime) -> datetime:
        return _ensure_aware(value)


class SourcedEvent(RawEvent):
    """A RawEvent stamped with provenance by the Aggregator."""

    id: str
    source: str
    fetched_at: datetime

    @field_validator("fetched_at")
    @classmethod
    def _aware_fetched_at(cls, value: datetime) -> datetime:
        return _ensure_aware(value)

    @classmethod
    def from_raw(cls, raw: RawEvent, *, event_id: str, source: str, fetched_at: datetime) -> SourcedEvent:
        return cls(
            **raw.model_dump(include=set(RawEvent.model_fields)),
            id=event_id,
            source=source,
            fetched_at=fetched_at,
        )

    def raw_view(self) -> dict[str, Any]:
        """The un-enriched listing shape served when ``enhanced=false``."""
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date.isoformat(),
            "location": self.location,
            "originalDescription": self.original_description,
            "source": self.source,
        }


class EventTranslation(BaseModel):
    """The four translatable fields of one event in one language.

    Always complete: a translation missing any field is never constructed.
    ``ticket_price`` is an empty string when the event has no price.
    """

    model_config = _WIRE_CONFIG

    title: str
    description: str
    location: str
    ticket_price: str = ""


class Enhancement(BaseModel):
    """Output of one enhancement strategy for one event.

    Enum fields accept any string and fall back to the documented default
    (entertainment / neutral / general) for values outside the vocabulary.
    """

    model_config = ConfigDict(frozen=True)

    description: str = Field(min_length=1)
    category: Category = Category.ENTERTAINMENT
    tags: list[str] = Field(default_factory=list)
    mood: Mood = Mood.NEUTRAL
    target_audience: TargetAudience = TargetAudience.GENERAL
    translations: dict[str, EventTranslation] = Field(default_factory=dict)
    provider: str = "rule_based"

    @field_validator("category", mode="before")
    @classmethod
    def _coerce_category(cls, value: Any) -> Category:
        return coerce_enum(Category, value, Category.ENTERTAINMENT)

    @field_validator("mood", mode="before")
    @classmethod
    def _coerce_mood(cls, value: Any) -> Mood:
        return coerce_enum(Mood, value, Mood.NEUTRAL)

    @field_validator("target_audience", mode="before")
    @classmethod
    def _coerce_audience(cls, value: Any) -> TargetAudience:
        return coerce_enum(TargetAudience, value, TargetAudience.GENERAL)


class EnrichedEvent(SourcedEvent):
    """A SourcedEvent augmented with enrichment output.

    ``ai_generated`` is ``True`` only when an AI provider produced the
    enrichment fields.  Rule-based records carry the same structure with
    deterministic values and ``ai_generated=False``.

    The trailing optional fields are only populated for published user
    submissions (``source == "user_submission"``).
    """

    enhanced_description: str
    ai_category: Category = Category.ENTERTAINMENT
    tags: list[str] = Field(default_factory=list)
    mood: Mood = Mood.NEUTRAL
    target_audience: TargetAudience = TargetAudience.GENERAL
    translations: dict[str, EventTranslation] = Field(default_factory=dict)
    ai_generated: bool = False
    enhanced_at: datetime
    enhancement_error: str | None = None

    status: str | None = None
    verification_score: int | None = None
    organizer_contact: str | None = None
    submitted_at: datetime | None = None
    published_at: datetime | None = None
    ai_approved: bool | None = None
    image: str | None = None

    @classmethod
    def from_sourced(
        cls,
        event: SourcedEvent,
        enhancement: Enhancement,
        *,
        ai_generated: bool,
        enhanced_at: datetime,
        enhancement_error: str | None = None,
    ) -> EnrichedEvent:
        return cls(
            **event.model_dump(include=set(SourcedEvent.model_fields)),
            enhanced_description=enhancement.description,
            ai_category=enhancement.category,
            tags=list(enhancement.tags),
            mood=enhancement.mood,
            target_audience=enhancement.target_audience,
            translations=dict(enhancement.translations),
            ai_generated=ai_generated,
            enhanced_at=enhanced_at,
            enhancement_error=enhancement_error,
        )

    def with_translation(self, language: str, translation: EventTranslation) -> EnrichedEvent:
        """Return a copy whose ``translations[language]`` is *translation*."""
        merged = {**self.translations, language: translation}
        return self.model_copy(update={"translations": merged})
