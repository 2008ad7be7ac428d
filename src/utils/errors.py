"""Custom exception hierarchy for artRevolution.

All application exceptions inherit from :class:`ArtRevolutionError`, which
carries an optional ``provider_name`` so error handlers can identify which
external collaborator (e.g. "gemini", "ollama", "timisoara_official")
caused the failure.

The hierarchy is organized by pipeline stage:

    ArtRevolutionError  (base -- catch-all for any artRevolution error)
    +-- SourceFetchError          (source adapter: fetch / parse failed)
    +-- AIProviderError           (any AI call failure, incl. malformed JSON)
    +-- EnhancementError          (per-event enrichment failure)
    +-- TranslationError          (an AI translation tier failed)
    +-- SubmissionValidationError (basic checks on a user submission)
    +-- CacheRefreshError         (whole aggregation + enrichment cycle failed)
    +-- EventNotFoundError        (lookup by id missed)
    +-- ConfigurationError        (startup / invalid config)

Only ``CacheRefreshError`` and ``EventNotFoundError`` ever reach the route
layer.  Everything else is recovered close to where it was raised and turned
into degraded-but-valid output.
"""

from __future__ import annotations


class ArtRevolutionError(Exception):
    """Base exception for all artRevolution errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name``.  ``__str__`` prefixes the provider name in brackets
    for structured log output, e.g. ``[gemini] Gemini API error: 429``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Aggregation / enrichment errors
# ---------------------------------------------------------------------------

class SourceFetchError(ArtRevolutionError):
    """Raised inside a source adapter when its listing cannot be fetched or parsed.

    Never crosses the adapter boundary: the adapter logs it and returns its
    fallback event set instead.
    """

    def __init__(
        self,
        message: str = "Event source fetch failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class AIProviderError(ArtRevolutionError):
    """Raised when an AI call fails or returns an unusable response.

    Network errors, timeouts, authentication failures and response-shape
    errors (missing or invalid JSON) are all reported through this one type,
    so every fallback chain can treat them identically.
    """

    def __init__(
        self,
        message: str = "AI provider call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class EnhancementError(ArtRevolutionError):
    """Raised when enrichment of a single event fails."""

    def __init__(
        self,
        message: str = "Event enhancement failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class TranslationError(ArtRevolutionError):
    """Raised when an AI translation tier cannot produce all four fields."""

    def __init__(
        self,
        message: str = "Event translation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Submission errors
# ---------------------------------------------------------------------------

class SubmissionValidationError(ArtRevolutionError):
    """Raised by the basic (pre-AI) validation of a user submission.

    ``reason`` is the machine-readable rejection code and ``feedback`` the
    human-readable explanation shown to the organizer.
    """

    def __init__(self, reason: str, feedback: str) -> None:
        self._reason = reason
        self._feedback = feedback
        super().__init__(message=feedback)

    @property
    def reason(self) -> str:
        return self._reason

    @property
    def feedback(self) -> str:
        return self._feedback


# ---------------------------------------------------------------------------
# Cache / lookup / configuration errors
# ---------------------------------------------------------------------------

class CacheRefreshError(ArtRevolutionError):
    """Raised when a full aggregation + enrichment cycle fails.

    The cache keeps serving its previous snapshot when this is raised.
    """

    def __init__(
        self,
        message: str = "Event cache refresh failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class EventNotFoundError(ArtRevolutionError):
    """Raised when no cached event matches the requested id."""

    def __init__(self, event_id: str) -> None:
        self._event_id = event_id
        super().__init__(message=f"Event not found: {event_id}")

    @property
    def event_id(self) -> str:
        return self._event_id


class ConfigurationError(ArtRevolutionError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
