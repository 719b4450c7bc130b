"""Base interface for response sinks."""
from abc import ABC, abstractmethod
from typing import Iterable
from ..event_models import Event

# Responses retained by a sink before the oldest are dropped
MAX_RESPONSES = 10000


class ResponseSink(ABC):
    """Upstream channel receiving completed response events."""

    @abstractmethod
    async def post_response(self, event: Event) -> None:
        """
        Deliver a fully built response event upstream.

        Args:
            event: The response event to deliver
        """
        pass

    @abstractmethod
    async def list_recent(self, limit: int = 50) -> Iterable[Event]:
        """
        Retrieve recently posted responses, newest first.

        Args:
            limit: Maximum number of events to return
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the sink is reachable.

        Returns:
            True if the sink is healthy, False otherwise
        """
        pass
