"""Utility modules for artRevolution.

- **errors** -- exception hierarchy rooted at ArtRevolutionError.
- **concurrency** -- semaphore-throttled gather and the batch rate limiter.
- **logging** -- structlog setup (console in development, JSON in production).
- **text_normalizer** -- whitespace/diacritic folding, language guess, tags.
- **date_parsing** (not re-exported here) -- listing date formats.
- **llm_json** (not re-exported here) -- JSON extraction from AI replies.
"""

from src.utils.concurrency import IntervalRateLimiter, throttled_gather
from src.utils.errors import (
    AIProviderError,
    ArtRevolutionError,
    CacheRefreshError,
    ConfigurationError,
    EnhancementError,
    EventNotFoundError,
    SourceFetchError,
    SubmissionValidationError,
    TranslationError,
)
from src.utils.logging import configure_logging, get_logger
from src.utils.text_normalizer import detect_language, fold, normalize_tags, normalize_whitespace

__all__ = [
    "AIProviderError",
    "ArtRevolutionError",
    "CacheRefreshError",
    "ConfigurationError",
    "EnhancementError",
    "EventNotFoundError",
    "IntervalRateLimiter",
    "SourceFetchError",
    "SubmissionValidationError",
    "TranslationError",
    "configure_logging",
    "detect_language",
    "fold",
    "get_logger",
    "normalize_tags",
    "normalize_whitespace",
    "throttled_gather",
]
