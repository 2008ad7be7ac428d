"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# Values are read from TWO sources (in priority order):
#
#   1. **Environment variables**, e.g. GEMINI_API_KEY=AIza...
#   2. **.env file** in the project root (local development only)
#
# Field ``gemini_api_key`` maps to env var ``GEMINI_API_KEY``.  Defaults
# below apply when neither source sets a value.
#
# An empty API key means "not configured": main.py leaves that AI tier out
# of the enrichment chain and the next tier (or the rule-based heuristic)
# takes over.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """artRevolution application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === AI Providers ===
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash-lite"
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.1"
    ollama_enabled: bool = True

    # === Cache / Refresh ===
    cache_duration_hours: float = 6.0
    refresh_interval_hours: float = 6.0
    scheduler_enabled: bool = True

    # === Enrichment ===
    enhancement_batch_size: int = 5
    batch_delay_seconds: float = 1.0
    ai_timeout_seconds: float = 30.0

    # === Sources ===
    source_timeout_seconds: float = 10.0
    timezone: str = "Europe/Bucharest"

    # === Submissions ===
    verification_threshold: int = 70

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"

    def get_available_ai_providers(self) -> list[str]:
        """Return the AI provider names that are configured, in fallback order."""
        providers: list[str] = []
        if self.gemini_api_key:
            providers.append("gemini")
        if self.ollama_enabled and self.ollama_base_url:
            providers.append("ollama")
        return providers
