"""In-memory response sink."""
from collections import deque
from typing import Iterable
import structlog
from .base import MAX_RESPONSES, ResponseSink
from ..event_models import Event

log = structlog.get_logger()


class InMemorySink(ResponseSink):
    """Keeps the most recent posted responses in a bounded local buffer."""

    def __init__(self, maxlen: int = MAX_RESPONSES):
        self._buffer: deque[Event] = deque(maxlen=maxlen)

    @property
    def posted(self) -> list[Event]:
        return list(self._buffer)

    async def post_response(self, event: Event) -> None:
        self._buffer.append(event)
        log.info(
            "response.posted",
            corr_id=event.corr_id,
            status=event.status.value,
            records=len(event.data),
            sink="memory",
        )

    async def list_recent(self, limit: int = 50) -> Iterable[Event]:
        return list(reversed(self._buffer))[:limit]

    async def health_check(self) -> bool:
        """In-memory sink is always healthy."""
        return True
