"""Translation provider adapters (implementations of ITranslationProvider)."""

from src.providers.translation.dictionary_provider import DictionaryTranslationProvider, PhraseTable
from src.providers.translation.llm_provider import LLMTranslationProvider

__all__ = ["DictionaryTranslationProvider", "LLMTranslationProvider", "PhraseTable"]
