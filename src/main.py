"""artRevolution FastAPI application entry point.

Wires sources, AI providers, services and routes together.  Loads
configuration from ``.env`` and ``config/config.yaml``, configures
structured logging, starts the periodic refresh and kicks off a warm-up
refresh so the first request usually finds a populated cache.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, tzinfo
from typing import Any, Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from src.api.middleware import ErrorHandlingMiddleware, RequestLoggingMiddleware
from src.api.routes import router as api_router
from src.config.loader import load_config
from src.config.settings import Settings
from src.interfaces.enhancement_strategy import IEnhancementStrategy
from src.interfaces.event_source import IEventSource
from src.interfaces.llm_provider import ILLMProvider
from src.interfaces.translation_provider import ITranslationProvider
from src.pipeline.event_cache import EventCache
from src.pipeline.scheduler import RefreshScheduler
from src.providers.enhancement.llm_strategy import LLMEnhancementStrategy
from src.providers.enhancement.rule_based import RuleBasedEnhancementStrategy
from src.providers.llm.gemini_provider import GeminiLLMProvider
from src.providers.llm.ollama_provider import OllamaLLMProvider
from src.providers.source.local_events_source import LocalEventsSource
from src.providers.source.primaria_source import PrimariaTimisoaraSource
from src.providers.source.whattodo_source import WhatToDoSource
from src.providers.translation.dictionary_provider import DictionaryTranslationProvider
from src.providers.translation.llm_provider import LLMTranslationProvider
from src.services.event_aggregator import EventAggregator
from src.services.event_enricher import EventEnricher
from src.services.event_service import EventService
from src.services.event_translator import EventTranslator
from src.services.submission_verifier import SubmissionVerifier
from src.utils.concurrency import IntervalRateLimiter
from src.utils.errors import ConfigurationError
from src.utils.logging import configure_logging, get_logger

settings = Settings()
configure_logging(log_level=settings.log_level, json_output=settings.app_env == "production")
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Provider factories
# ---------------------------------------------------------------------------


def _resolve_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"Unknown timezone: {name!r}") from exc


def _build_llm_providers(app_settings: Settings) -> list[ILLMProvider]:
    """Configured AI providers in fallback order (Gemini, then Ollama)."""
    candidates: list[ILLMProvider] = [
        GeminiLLMProvider(settings=app_settings),
        OllamaLLMProvider(settings=app_settings),
    ]
    return [provider for provider in candidates if provider.is_available()]


def _build_sources(
    config: dict[str, Any],
    http_client: httpx.AsyncClient,
    tz: tzinfo,
    clock: Callable[[], datetime],
    timeout: float,
) -> list[IEventSource]:
    source_config = config.get("sources", {})
    urls: dict[str, str] = source_config.get("urls") or {}
    available: list[IEventSource] = [
        PrimariaTimisoaraSource(
            http_client=http_client,
            tz=tz,
            clock=clock,
            url=urls.get(PrimariaTimisoaraSource.source_name),
            timeout=timeout,
        ),
        WhatToDoSource(
            http_client=http_client,
            tz=tz,
            clock=clock,
            url=urls.get(WhatToDoSource.source_name),
            timeout=timeout,
        ),
        LocalEventsSource(clock=clock),
    ]
    enabled = source_config.get("enabled")
    if enabled is None:
        return available
    return [source for source in available if source.get_source_name() in enabled]


# ---------------------------------------------------------------------------
# Full DI assembly for the FastAPI application
# ---------------------------------------------------------------------------


def _build_all(app_settings: Settings, config: dict[str, Any] | None = None) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    config = config if config is not None else load_config(settings=app_settings)
    ai_config = config.get("ai", {})
    temperature = float(ai_config.get("temperature", 0.7))
    max_tokens = int(ai_config.get("max_tokens", 1000))
    source_config = config.get("sources", {})
    source_timeout = float(source_config.get("timeout_seconds", app_settings.source_timeout_seconds))

    tz = _resolve_timezone(source_config.get("timezone", app_settings.timezone))

    def clock() -> datetime:
        return datetime.now(tz)

    # -- Shared resources --
    headers = {}
    user_agent = source_config.get("user_agent")
    if user_agent:
        headers["User-Agent"] = user_agent
    http_client = httpx.AsyncClient(
        timeout=source_timeout,
        headers=headers,
        follow_redirects=True,
    )

    # -- Sources / aggregation --
    sources = _build_sources(
        config, http_client, tz, clock, timeout=source_timeout
    )
    aggregator = EventAggregator(sources=sources, clock=clock)

    # -- AI providers, strongest first --
    llm_providers = _build_llm_providers(app_settings)
    dictionary = DictionaryTranslationProvider()
    rule_strategy = RuleBasedEnhancementStrategy(dictionary=dictionary)

    strategies: list[IEnhancementStrategy] = [
        LLMEnhancementStrategy(
            llm=llm, dictionary=dictionary, temperature=temperature, max_tokens=max_tokens
        )
        for llm in llm_providers
    ]
    enricher = EventEnricher(
        strategies=strategies,
        fallback=rule_strategy,
        clock=clock,
        rate_limiter=IntervalRateLimiter(app_settings.batch_delay_seconds),
        batch_size=app_settings.enhancement_batch_size,
        timeout_seconds=app_settings.ai_timeout_seconds,
    )

    cache = EventCache(
        aggregator=aggregator,
        enricher=enricher,
        clock=clock,
        ttl=timedelta(hours=app_settings.cache_duration_hours),
    )

    translation_providers: list[ITranslationProvider] = [
        LLMTranslationProvider(llm=llm) for llm in llm_providers
    ]
    translator = EventTranslator(
        providers=translation_providers,
        fallback=dictionary,
        timeout_seconds=app_settings.ai_timeout_seconds,
        cache_ttl=app_settings.cache_duration_hours * 3600,
    )

    verifier = SubmissionVerifier(
        llm_providers=llm_providers,
        rule_strategy=rule_strategy,
        dictionary=dictionary,
        clock=clock,
        tz=tz,
        threshold=app_settings.verification_threshold,
        timeout_seconds=app_settings.ai_timeout_seconds,
    )

    event_service = EventService(
        cache=cache, translator=translator, verifier=verifier, clock=clock
    )
    scheduler = RefreshScheduler(cache=cache, interval_hours=app_settings.refresh_interval_hours)

    return {
        "http_client": http_client,
        "llm_providers": llm_providers,
        "llm_provider_names": [p.get_provider_name() for p in llm_providers],
        "source_names": aggregator.source_names,
        "event_cache": cache,
        "event_service": event_service,
        "refresh_scheduler": scheduler,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Build components on startup, warm the cache, clean up on shutdown."""
    app_settings: Settings = getattr(application.state, "settings", settings)
    components = _build_all(app_settings)

    for key, value in components.items():
        setattr(application.state, key, value)

    scheduler: RefreshScheduler = components["refresh_scheduler"]
    if app_settings.scheduler_enabled:
        scheduler.start()

    cache: EventCache = components["event_cache"]
    warm_up = asyncio.create_task(cache.scheduled_refresh())

    _logger.info(
        "app_startup",
        version="0.1.0",
        environment=app_settings.app_env,
        ai_providers=components["llm_provider_names"],
        sources=components["source_names"],
    )

    yield

    scheduler.shutdown()
    if not warm_up.done():
        warm_up.cancel()
    await cache.close()
    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="artRevolution API",
        version="0.1.0",
        description=(
            "Cultural events in Timisoara aggregated from several listings, "
            "enriched with AI-written descriptions and categories, translated "
            "between English and Romanian, plus moderated organizer submissions."
        ),
        lifespan=_lifespan,
    )
    application.state.settings = app_settings or settings

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)

    application.include_router(api_router)
    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
