"""Event dispatcher: verifies inbound events, runs action handlers, posts responses."""
import structlog
from ..event_models import Event, Status
from ..errors import HandlerContractError, UnknownActionError
from ..handlers.registry import HandlerRegistry, default_registry
from ..health import HealthCheckResponder
from ..sinks.base import ResponseSink
from ..metrics import Metrics
from ..config import get_settings
from .verifier import EventVerifier, StatusVerifier

log = structlog.get_logger()


class EventDispatcher:
    """
    Handles one inbound event at a time.

    Holds no per-event state, so concurrent calls need no synchronization.
    """

    def __init__(
        self,
        sink: ResponseSink,
        verifier: EventVerifier | None = None,
        registry: HandlerRegistry | None = None,
        health: HealthCheckResponder | None = None,
        metrics: Metrics | None = None,
        strict_actions: bool | None = None,
        acknowledge_unverified: bool | None = None,
    ):
        """
        Args:
            sink: Upstream channel receiving response events
            verifier: Acceptance check (defaults to StatusVerifier)
            registry: Action handlers (defaults to the example handlers)
            health: Health-check responder (defaults to a static healthy probe)
            metrics: Optional Prometheus metrics
            strict_actions: Raise on unknown action strings (defaults to settings)
            acknowledge_unverified: Post REJECTED for non-accepted events
                instead of dropping them (defaults to settings)
        """
        settings = get_settings()
        self.sink = sink
        self.verifier = verifier or StatusVerifier()
        self.registry = registry or default_registry()
        self.health = health or HealthCheckResponder(sink, metrics=metrics)
        self.metrics = metrics
        self.strict_actions = settings.STRICT_ACTIONS if strict_actions is None else strict_actions
        self.acknowledge_unverified = (
            settings.ACKNOWLEDGE_UNVERIFIED if acknowledge_unverified is None else acknowledge_unverified
        )

    async def handle(self, event: Event | None) -> Event | None:
        """
        Handle an inbound event.

        Returns:
            The response event posted to the sink, or None when nothing was posted

        Raises:
            UnknownActionError: In strict mode, for an action outside the known set
            HandlerContractError: If a handler changed status or correlation identity
        """
        if event is None:
            log.warning("event.missing")
            return None

        if event.is_health_check():
            return await self.health.respond(event)

        with structlog.contextvars.bound_contextvars(
            corr_id=event.corr_id, org_id=event.org_id, action=event.action
        ):
            verified = await self.verifier.verify(event)
            if verified.status != Status.ADAPTER_ACCEPTED:
                return await self._not_accepted(event, verified)

            response = event.derive_response(Status.ADAPTER_RESPONSE)
            self._dispatch(event, response)

            await self.sink.post_response(response)
            if self.metrics:
                self.metrics.record_event(event.action, response.status.value)
            log.info("event.dispatched", status=response.status.value, records=len(response.data))
            return response

    def _dispatch(self, event: Event, response: Event):
        try:
            handler = self.registry.resolve(event.action)
        except UnknownActionError:
            if self.strict_actions:
                log.error("event.unknown_action")
                raise
            handler = None

        if handler is None:
            response.status = Status.ADAPTER_REJECTED
            response.message = f"Action {event.action!r} is not supported by this adapter"
            log.info("event.action_unsupported")
            return

        handler.produce(response)

        if response.status != Status.ADAPTER_RESPONSE or response.corr_id != event.corr_id:
            raise HandlerContractError(
                f"{type(handler).__name__} changed status or correlation identity of the response"
            )

    async def _not_accepted(self, event: Event, verified: Event) -> Event | None:
        log.info("event.not_accepted", status=verified.status.value, reason=verified.message)
        if self.metrics:
            self.metrics.record_event(event.action, verified.status.value)
        if not self.acknowledge_unverified:
            return None

        response = event.derive_response(Status.ADAPTER_REJECTED)
        response.message = verified.message
        await self.sink.post_response(response)
        return response
