"""LLM provider adapters.

Two concrete implementations of ILLMProvider (src/interfaces/llm_provider.py):
    - GeminiLLMProvider -- Google Gemini via google-genai (primary tier)
    - OllamaLLMProvider -- local models via Ollama's OpenAI-compatible API (secondary tier)

main.py builds the providers that are configured and hands them, in that
order, to the enhancement, verification and translation chains.
"""

from src.providers.llm.gemini_provider import GeminiLLMProvider
from src.providers.llm.ollama_provider import OllamaLLMProvider

__all__ = ["GeminiLLMProvider", "OllamaLLMProvider"]
