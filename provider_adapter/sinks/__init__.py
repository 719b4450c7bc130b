"""Response sinks and default sink selection."""
import structlog
from .base import ResponseSink
from .memory import InMemorySink
from .redis_stream import RedisStreamSink
from ..config import get_settings

log = structlog.get_logger()


def create_default_sink() -> ResponseSink:
    """
    Create the sink selected by the SINK_ADAPTER setting.

    Falls back to the in-memory sink when Redis is requested without REDIS_URL.
    """
    settings = get_settings()
    if settings.SINK_ADAPTER == "redis":
        if not settings.REDIS_URL:
            log.warning(
                "sink.fallback",
                requested="redis",
                actual="memory",
                reason="REDIS_URL not configured"
            )
            return InMemorySink()

        log.info("sink.selected", type="redis", url=str(settings.REDIS_URL))
        return RedisStreamSink()

    log.info("sink.selected", type="memory")
    return InMemorySink()


__all__ = ["ResponseSink", "InMemorySink", "RedisStreamSink", "create_default_sink"]
