"""Abstract base class for event translation providers.

Providers translate the four user-facing fields of an event (title,
description, location, ticket price) into one target language.  The
translator service chains an AI-backed provider in front of the
deterministic dictionary provider.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.models.event import EventTranslation, Language


# Concrete implementations: LLMTranslationProvider, DictionaryTranslationProvider
# Located in: src/providers/translation/
class ITranslationProvider(ABC):
    """Contract for translating event fields."""

    @abstractmethod
    async def translate(self, fields: EventTranslation, target_language: Language) -> EventTranslation:
        """Return *fields* rendered in *target_language*.

        The result always carries all four fields.

        Raises
        ------
        src.utils.errors.TranslationError
            When the provider cannot produce a complete translation.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Identifier used in logs."""
