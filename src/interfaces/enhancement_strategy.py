"""Abstract base class for event enhancement strategies.

The Enricher holds an ordered list of strategies and tries them in turn;
the first one to return an :class:`~src.models.event.Enhancement` wins.
The last strategy in every chain is the deterministic rule-based one, which
never fails.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.event import Enhancement, SourcedEvent


# Concrete implementations: LLMEnhancementStrategy, RuleBasedEnhancementStrategy
# Located in: src/providers/enhancement/
class IEnhancementStrategy(ABC):
    """Contract for producing enrichment fields for one event."""

    @abstractmethod
    async def enhance(self, event: SourcedEvent) -> Enhancement:
        """Produce description, category, mood, audience, tags and translations.

        Raises
        ------
        src.utils.errors.AIProviderError
            When an AI-backed strategy cannot produce a valid result
            (provider failure or unparseable response).
        """

    @abstractmethod
    def get_strategy_name(self) -> str:
        """Identifier used in logs and in ``enhancement_error`` summaries."""

    @property
    @abstractmethod
    def is_ai(self) -> bool:
        """``True`` when results from this strategy count as AI-generated."""
