"""Cache lifecycle: the event cache and its periodic refresh."""

from src.pipeline.event_cache import EventCache
from src.pipeline.scheduler import RefreshScheduler

__all__ = ["EventCache", "RefreshScheduler"]
