"""Google Gemini LLM provider adapter.

Primary AI tier for enrichment, submission scoring and translation.  Uses the
``google-genai`` SDK's async surface (``client.aio``) so calls suspend the
event loop instead of blocking it.

Setup: create an API key in Google AI Studio and set GEMINI_API_KEY.
GEMINI_MODEL defaults to ``gemini-2.5-flash-lite``.
"""

from __future__ import annotations

import structlog
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from src.config.settings import Settings
from src.interfaces.llm_provider import ILLMProvider
from src.utils.errors import AIProviderError

logger = structlog.get_logger(logger_name=__name__)


class GeminiLLMProvider(ILLMProvider):
    """LLM provider backed by the Gemini API.

    The client is only constructed when an API key is configured; an
    unconfigured provider reports ``is_available() == False`` and raises
    :class:`AIProviderError` if called anyway.
    """

    def __init__(self, settings: Settings) -> None:
        self._api_key = settings.gemini_api_key
        self._model = settings.gemini_model
        self._client = genai.Client(api_key=self._api_key) if self._api_key else None

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
        """Generate a text completion via ``client.aio.models.generate_content``."""
        if self._client is None:
            raise AIProviderError(
                message="Gemini API key not configured",
                provider_name=self.get_provider_name(),
            )

        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=user_prompt,
                config=types.GenerateContentConfig(
                    system_instruction=system_prompt,
                    temperature=temperature,
                    max_output_tokens=max_tokens,
                ),
            )
        except genai_errors.APIError as exc:
            raise AIProviderError(
                message=f"Gemini API error: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        text = response.text
        if not text:
            raise AIProviderError(
                message="Gemini returned empty response",
                provider_name=self.get_provider_name(),
            )
        logger.info("gemini_completion", model=self._model)
        return text

    def get_provider_name(self) -> str:
        return "gemini"

    def is_available(self) -> bool:
        """Return ``True`` if a Gemini API key is configured."""
        return bool(self._api_key)
