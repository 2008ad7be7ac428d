"""Moderation gate for user-submitted events.

Per-submission flow::

    RECEIVED -> basic validation --fail--> REJECTED (specific reason, no AI call)
                     |
                     v
             AI rubric scoring (each configured provider in turn)
                     |  malformed / failed
                     v
             rule-based rubric scoring
                     |
                     v
        score >= threshold ? APPROVED : REJECTED (low_quality)

Rubric (both scorers): cultural relevance 0-30, content quality 0-25,
spam indicators 0-20 (20 = no spam), appropriateness 0-15, completeness
0-10.  Total out of 100; the approval threshold defaults to 70.
"""

from __future__ import annotations

import asyncio
import json
import re
from datetime import datetime, tzinfo
from typing import Any, Callable

from dateutil import parser as dateutil_parser

from src.config.domain_knowledge import (
    CULTURAL_KEYWORDS,
    INAPPROPRIATE_TERMS,
    LOCAL_AREA_KEYWORDS,
    SPAM_PHRASES,
    find_keywords,
)
from src.interfaces.llm_provider import ILLMProvider
from src.models.event import (
    Category,
    EnrichedEvent,
    EventTranslation,
    Language,
    SourcedEvent,
    coerce_enum,
)
from src.models.submission import RejectionReason, UserSubmission, VerificationResult
from src.providers.enhancement.rule_based import RuleBasedEnhancementStrategy
from src.providers.translation.dictionary_provider import DictionaryTranslationProvider
from src.utils.errors import AIProviderError, SubmissionValidationError
from src.utils.llm_json import extract_json_object
from src.utils.logging import get_logger
from src.utils.text_normalizer import fold, normalize_whitespace

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

_MIN_TITLE_LENGTH = 5
_MIN_DESCRIPTION_LENGTH = 20
_DEFAULT_THRESHOLD = 70
_DEFAULT_TIMEOUT = 30.0

_REQUIRED_FIELDS = (
    ("title", "title"),
    ("description", "description"),
    ("date", "date"),
    ("location", "location"),
    ("category", "category"),
    ("organizer_contact", "organizerContact"),
)

_SUGGESTIONS: dict[RejectionReason, list[str]] = {
    RejectionReason.MISSING_REQUIRED_FIELD: ["Fill in every required field before submitting."],
    RejectionReason.INVALID_EMAIL: ["Use a valid contact email, e.g. organizer@example.ro."],
    RejectionReason.INVALID_DATE: ["Use a date format such as 2025-12-20 or 20.12.2025."],
    RejectionReason.PAST_DATE: ["Only upcoming events can be published; check the event date."],
    RejectionReason.OUT_OF_AREA: [
        "Include the venue address in Timișoara or Timiș county (e.g. 'Piața Unirii, Timișoara').",
    ],
    RejectionReason.TITLE_TOO_SHORT: [f"Use a descriptive title of at least {_MIN_TITLE_LENGTH} characters."],
    RejectionReason.DESCRIPTION_TOO_SHORT: [
        f"Describe the event in at least {_MIN_DESCRIPTION_LENGTH} characters: what, who, and why attend.",
    ],
}

_SYSTEM_PROMPT = (
    "You moderate event submissions for a cultural events guide to Timișoara, Romania. "
    "Score strictly with the rubric you are given. Respond with a single JSON object and nothing else."
)


def parse_submission_date(value: str, tz: tzinfo) -> datetime:
    """Parse the submitted date; naive values are read in *tz*.

    Raises
    ------
    ValueError
        If the value is not a recognisable date.
    """
    text = value.strip()
    try:
        parsed = dateutil_parser.isoparse(text)
    except ValueError:
        try:
            parsed = dateutil_parser.parse(text, dayfirst=True)
        except (ValueError, OverflowError) as exc:
            raise ValueError(f"Unrecognised date: {value!r}") from exc
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz)
    return parsed.astimezone(tz)


class SubmissionVerifier:
    """Validates and scores user submissions; builds publishable records."""

    def __init__(
        self,
        llm_providers: list[ILLMProvider],
        rule_strategy: RuleBasedEnhancementStrategy,
        dictionary: DictionaryTranslationProvider,
        clock: Callable[[], datetime],
        tz: tzinfo,
        threshold: int = _DEFAULT_THRESHOLD,
        timeout_seconds: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._llm_providers = list(llm_providers)
        self._rule_strategy = rule_strategy
        self._dictionary = dictionary
        self._clock = clock
        self._tz = tz
        self._threshold = threshold
        self._timeout = timeout_seconds
        self._last_id = 0
        self._logger = get_logger(__name__)

    @property
    def threshold(self) -> int:
        return self._threshold

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def verify(self, submission: UserSubmission) -> VerificationResult:
        """Run validation then scoring.  Never raises for AI failures."""
        try:
            self.validate(submission)
        except SubmissionValidationError as exc:
            reason = RejectionReason(exc.reason)
            self._logger.warning(
                "submission_rejected_validation",
                reason=reason.value,
                title=submission.title,
            )
            return VerificationResult(
                approved=False,
                score=0,
                feedback=exc.feedback,
                suggestions=list(_SUGGESTIONS.get(reason, [])),
                reason=reason,
                scored_by="validation",
            )

        for llm in self._llm_providers:
            name = llm.get_provider_name()
            try:
                result = await asyncio.wait_for(self._ai_score(llm, submission), timeout=self._timeout)
            except asyncio.TimeoutError:
                self._logger.warning("submission_ai_scoring_timeout", provider=name)
            except Exception as exc:
                self._logger.warning("submission_ai_scoring_failed", provider=name, error=str(exc))
            else:
                self._log_outcome(submission, result)
                return result

        result = self.rule_based_score(submission)
        self._log_outcome(submission, result)
        return result

    def validate(self, submission: UserSubmission) -> datetime:
        """Basic checks.  Returns the parsed event date.

        Raises
        ------
        SubmissionValidationError
            With the first failing reason, checked in a fixed order.
        """
        missing = [
            wire for attr, wire in _REQUIRED_FIELDS if not str(getattr(submission, attr) or "").strip()
        ]
        if missing:
            raise SubmissionValidationError(
                RejectionReason.MISSING_REQUIRED_FIELD.value,
                f"Missing required fields: {', '.join(missing)}.",
            )

        if not _EMAIL_RE.match(submission.organizer_contact.strip()):
            raise SubmissionValidationError(
                RejectionReason.INVALID_EMAIL.value,
                "The organizer contact must be a valid email address.",
            )

        try:
            event_date = parse_submission_date(submission.date, self._tz)
        except ValueError:
            raise SubmissionValidationError(
                RejectionReason.INVALID_DATE.value,
                f"We could not understand the event date '{submission.date}'.",
            ) from None

        today = self._clock().astimezone(self._tz).date()
        if event_date.date() < today:
            raise SubmissionValidationError(
                RejectionReason.PAST_DATE.value,
                "The event date is in the past.",
            )

        folded_location = fold(submission.location)
        if not find_keywords(folded_location, LOCAL_AREA_KEYWORDS):
            raise SubmissionValidationError(
                RejectionReason.OUT_OF_AREA.value,
                "We only publish events taking place in Timișoara and the surrounding area.",
            )

        if len(submission.title.strip()) < _MIN_TITLE_LENGTH:
            raise SubmissionValidationError(
                RejectionReason.TITLE_TOO_SHORT.value,
                f"The title must be at least {_MIN_TITLE_LENGTH} characters long.",
            )

        if len(submission.description.strip()) < _MIN_DESCRIPTION_LENGTH:
            raise SubmissionValidationError(
                RejectionReason.DESCRIPTION_TOO_SHORT.value,
                f"The description must be at least {_MIN_DESCRIPTION_LENGTH} characters long.",
            )

        return event_date

    def rule_based_score(self, submission: UserSubmission) -> VerificationResult:
        """Deterministic rubric scoring from the keyword tables."""
        text = fold(f"{submission.title} {submission.description}")
        suggestions: list[str] = []

        cultural_hits = find_keywords(text, CULTURAL_KEYWORDS)
        cultural = min(30, 8 * len(cultural_hits))
        if cultural < 16:
            suggestions.append("Explain the cultural or artistic side of the event (genre, artists, programme).")

        length = len(normalize_whitespace(submission.description))
        if length >= 200:
            quality = 25
        elif length >= 100:
            quality = 20
        elif length >= 50:
            quality = 15
        else:
            quality = 10
        if quality < 20:
            suggestions.append("Add more detail to the description (at least 100 characters).")

        spam_hits = [phrase for phrase in SPAM_PHRASES if phrase in text]
        spam = max(0, 20 - 10 * len(spam_hits))
        if spam_hits:
            suggestions.append(f"Remove promotional phrases such as '{spam_hits[0]}'.")

        inappropriate_hits = [term for term in INAPPROPRIATE_TERMS if term in text]
        appropriateness = 0 if inappropriate_hits else 15
        if inappropriate_hits:
            suggestions.append("Remove content that is not suitable for a general audience.")

        completeness = 0
        if submission.website:
            completeness += 4
        else:
            suggestions.append("Add a website or ticketing link.")
        if submission.ticket_price:
            completeness += 3
        else:
            suggestions.append("State the ticket price (or 'Free').")
        if submission.tags:
            completeness += 2
        if submission.image:
            completeness += 1
        completeness = min(10, completeness)

        score = cultural + quality + spam + appropriateness + completeness
        approved = score >= self._threshold and not inappropriate_hits
        return VerificationResult(
            approved=approved,
            score=score,
            feedback=self._feedback(approved, score),
            suggestions=suggestions,
            reason=None if approved else RejectionReason.LOW_QUALITY,
            scored_by="rule_based",
        )

    def build_published_event(
        self,
        submission: UserSubmission,
        result: VerificationResult,
    ) -> EnrichedEvent:
        """Turn an approved submission into a cache-ready record."""
        now = self._clock()
        event_date = parse_submission_date(submission.date, self._tz)
        description = normalize_whitespace(submission.description)

        sourced = SourcedEvent(
            id=self._next_id(now),
            title=submission.title.strip(),
            date=event_date,
            location=submission.location.strip(),
            original_description=description,
            category=submission.category.strip(),
            visit_source=submission.website or None,
            ticket_price=submission.ticket_price or None,
            source="user_submission",
            fetched_at=now,
        )
        rules = self._rule_strategy.build(sourced)
        fields = EventTranslation(
            title=sourced.title,
            description=description,
            location=sourced.location,
            ticket_price=sourced.ticket_price or "",
        )
        enhancement = rules.model_copy(
            update={
                "description": description,
                "category": coerce_enum(Category, submission.category, rules.category),
                "tags": list(submission.tags) or list(rules.tags),
                "translations": {
                    language.value: self._dictionary.translate_fields(fields, language) for language in Language
                },
            }
        )
        event = EnrichedEvent.from_sourced(sourced, enhancement, ai_generated=False, enhanced_at=now)
        return event.model_copy(
            update={
                "status": "published",
                "verification_score": result.score,
                "organizer_contact": submission.organizer_contact.strip(),
                "submitted_at": now,
                "published_at": now,
                "ai_approved": result.scored_by not in ("rule_based", "validation"),
                "image": submission.image,
            }
        )

    # ------------------------------------------------------------------
    # AI scoring
    # ------------------------------------------------------------------

    async def _ai_score(self, llm: ILLMProvider, submission: UserSubmission) -> VerificationResult:
        payload = submission.model_dump(by_alias=True, exclude={"image"})
        prompt = (
            "Score this event submission for the Timișoara cultural guide.\n"
            f"{json.dumps(payload, ensure_ascii=False)}\n\n"
            "Rubric: cultural relevance 0-30, content quality 0-25, spam indicators 0-20 "
            "(20 = no spam), appropriateness 0-15, completeness 0-10. Total out of 100; "
            f"approve at {self._threshold} or above.\n"
            'Return JSON: {"approved": bool, "score": int, "reason": str, '
            '"feedback": str, "suggestions": [str]}'
        )
        response = await llm.complete(
            system_prompt=_SYSTEM_PROMPT,
            user_prompt=prompt,
            temperature=0.2,
            max_tokens=600,
        )
        try:
            return self._parse_ai_verdict(extract_json_object(response), llm.get_provider_name())
        except ValueError as exc:
            raise AIProviderError(
                message=f"Malformed verification response: {exc}",
                provider_name=llm.get_provider_name(),
            ) from exc

    def _parse_ai_verdict(self, parsed: dict[str, Any], provider: str) -> VerificationResult:
        score = parsed.get("score")
        if isinstance(score, bool) or not isinstance(score, (int, float)) or not 0 <= score <= 100:
            raise ValueError("score must be a number between 0 and 100")
        if not isinstance(parsed.get("approved"), bool):
            raise ValueError("approved must be a boolean")
        feedback = parsed.get("feedback")
        if not isinstance(feedback, str) or not feedback.strip():
            raise ValueError("feedback must be a non-empty string")
        reason = parsed.get("reason")
        if not isinstance(reason, str) or not reason.strip():
            raise ValueError("reason must be a non-empty string")
        suggestions = parsed.get("suggestions", [])
        if not isinstance(suggestions, list):
            raise ValueError("suggestions must be a list")

        score = int(round(score))
        # The threshold is ours to enforce; the model's own verdict is advisory.
        approved = score >= self._threshold
        if approved != parsed["approved"]:
            self._logger.info("ai_verdict_overridden_by_threshold", provider=provider, score=score)

        return VerificationResult(
            approved=approved,
            score=score,
            feedback=feedback.strip(),
            suggestions=[str(s) for s in suggestions if str(s).strip()],
            reason=None if approved else RejectionReason.LOW_QUALITY,
            reason_detail=reason.strip(),
            scored_by=provider,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _feedback(self, approved: bool, score: int) -> str:
        if approved:
            return "Your event meets our community guidelines and has been published."
        return (
            f"Your event scored {score}/100; at least {self._threshold} points are needed "
            "for publication. See the suggestions below."
        )

    def _next_id(self, now: datetime) -> str:
        candidate = int(now.timestamp() * 1000)
        # Two approvals within the same millisecond still get distinct ids.
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return str(candidate)

    def _log_outcome(self, submission: UserSubmission, result: VerificationResult) -> None:
        self._logger.info(
            "submission_scored",
            title=submission.title,
            score=result.score,
            approved=result.approved,
            scored_by=result.scored_by,
        )
