"""Ollama LLM provider adapter.

Secondary AI tier.  Wraps a local Ollama server via its OpenAI-compatible
API endpoint, using the ``openai`` client library pointed at the Ollama base
URL.  No API cost and no network egress; local models are weaker than
Gemini, which is why this sits second in the chain.

Setup: install Ollama (https://ollama.ai), ``ollama pull llama3.1``, and set
OLLAMA_BASE_URL=http://localhost:11434 (OLLAMA_MODEL picks another model).
"""

from __future__ import annotations

import openai
import structlog

from src.config.settings import Settings
from src.interfaces.llm_provider import ILLMProvider
from src.utils.errors import AIProviderError

logger = structlog.get_logger(logger_name=__name__)


class OllamaLLMProvider(ILLMProvider):
    """LLM provider backed by a local Ollama server.

    Ollama exposes an OpenAI-compatible ``/v1`` API, so this adapter reuses
    the ``openai.AsyncOpenAI`` client with a different ``base_url``.
    """

    def __init__(self, settings: Settings) -> None:
        self._base_url = settings.ollama_base_url if settings.ollama_enabled else ""
        self._text_model = settings.ollama_model
        self._client = openai.AsyncOpenAI(
            base_url=f"{(self._base_url or 'http://localhost:11434').rstrip('/')}/v1",
            # Ollama ignores the key but the SDK requires a non-empty value.
            api_key="ollama",
            timeout=settings.ai_timeout_seconds,
            max_retries=0,
        )

    # ------------------------------------------------------------------
    # ILLMProvider implementation
    # ------------------------------------------------------------------

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.7,
        max_tokens: int = 1000,
    ) -> str:
        """Generate a text completion via Ollama's OpenAI-compatible API."""
        try:
            response = await self._client.chat.completions.create(
                model=self._text_model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.APIError as exc:
            raise AIProviderError(
                message=f"Ollama API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise AIProviderError(
                message="Ollama returned empty response",
                provider_name=self.get_provider_name(),
            )
        logger.info("ollama_completion", model=self._text_model)
        return content

    def get_provider_name(self) -> str:
        return "ollama"

    def is_available(self) -> bool:
        """Return ``True`` if the Ollama base URL is configured."""
        return bool(self._base_url)
