"""Public interface definitions for all external collaborators.

Every AI provider, event origin and translation backend is reached only
through the abstract base classes in this package.  Concrete adapters live
in ``src/providers/`` and are wired together in ``src/main.py``; unit tests
inject ``MagicMock(spec=...)`` doubles in their place.

CONCRETE PROVIDER MAP:
    Interface                  ->  Concrete implementations (in src/providers/)
    ---------------------------------------------------------------------
    ILLMProvider               ->  GeminiLLMProvider, OllamaLLMProvider
    IEventSource               ->  PrimariaTimisoaraSource, WhatToDoSource,
                                   LocalEventsSource
    IEnhancementStrategy       ->  LLMEnhancementStrategy,
                                   RuleBasedEnhancementStrategy
    ITranslationProvider       ->  LLMTranslationProvider,
                                   DictionaryTranslationProvider
"""

from src.interfaces.enhancement_strategy import IEnhancementStrategy
from src.interfaces.event_source import IEventSource
from src.interfaces.llm_provider import ILLMProvider
from src.interfaces.translation_provider import ITranslationProvider

__all__ = [
    "IEnhancementStrategy",
    "IEventSource",
    "ILLMProvider",
    "ITranslationProvider",
]
