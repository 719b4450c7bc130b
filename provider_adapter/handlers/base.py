"""Base interface for action handlers."""
from abc import ABC, abstractmethod
from ..event_models import Event


class ActionHandler(ABC):
    """Produces the response data for a single action."""

    @abstractmethod
    def produce(self, response: Event) -> None:
        """
        Append records to the response event.

        Handlers must only add data. Changing the status or the
        correlation identity of the response is a contract violation.

        Args:
            response: The response event being built
        """
        pass
