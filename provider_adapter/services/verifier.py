"""Event acceptance verification."""
from abc import ABC, abstractmethod
import structlog
from ..event_models import Event, Status
from ..config import get_settings

log = structlog.get_logger()


class EventVerifier(ABC):
    """Decides whether this adapter instance should handle an event."""

    @abstractmethod
    async def verify(self, event: Event) -> Event:
        """
        Verify an inbound event.

        Returns:
            A status event derived from the inbound event. Only a status of
            ADAPTER_ACCEPTED lets the dispatcher continue.
        """
        pass


class StatusVerifier(EventVerifier):
    """Accepts events for the organisations this adapter serves."""

    def __init__(self, org_ids: set[str] | None = None):
        """
        Args:
            org_ids: Accepted organisations (defaults to settings.ORG_IDS;
                an empty set accepts every organisation)
        """
        self.org_ids = get_settings().org_ids() if org_ids is None else set(org_ids)

    async def verify(self, event: Event) -> Event:
        if self.org_ids and event.org_id not in self.org_ids:
            status = event.derive_response(Status.ADAPTER_REJECTED)
            status.message = f"Adapter does not serve organisation {event.org_id!r}"
            log.info("event.verification_rejected", corr_id=event.corr_id, org_id=event.org_id)
            return status

        log.debug("event.verification_accepted", corr_id=event.corr_id, org_id=event.org_id)
        return event.derive_response(Status.ADAPTER_ACCEPTED)
