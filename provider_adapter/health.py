"""
Health checks: health-check event responses and HTTP liveness/readiness probes.
"""
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict
import inspect
from .event_models import Event, Health, HealthStatus, Status
from .sinks.base import ResponseSink
from .metrics import Metrics
from .config import get_settings
from .logging import get_logger

logger = get_logger()

UNHEALTHY_MESSAGE = "The adapter is unable to communicate with the application."


class HealthProbe(ABC):
    """Checks whether the adapter can reach the application behind it."""

    @abstractmethod
    async def check(self) -> bool:
        pass


class StaticProbe(HealthProbe):
    """Probe with a fixed outcome. Healthy unless told otherwise."""

    def __init__(self, healthy: bool = True):
        self.healthy = healthy

    async def check(self) -> bool:
        return self.healthy


class CallableProbe(HealthProbe):
    """Wraps a plain or async callable returning a truthy health result."""

    def __init__(self, fn: Callable[[], bool | Awaitable[bool]]):
        self._fn = fn

    async def check(self) -> bool:
        result = self._fn()
        if inspect.isawaitable(result):
            result = await result
        return bool(result)


class HealthCheckResponder:
    """
    Answers health-check events.

    Each call is independent: the response is derived from the inbound
    event, marked TEMP_UPSTREAM_QUEUE, carries exactly one Health record
    and is always posted to the sink.
    """

    def __init__(
        self,
        sink: ResponseSink,
        probe: HealthProbe | None = None,
        component: str | None = None,
        metrics: Metrics | None = None,
    ):
        self.sink = sink
        self.probe = probe or StaticProbe()
        self.component = component or get_settings().HEALTH_COMPONENT
        self.metrics = metrics

    async def respond(self, event: Event) -> Event:
        response = event.derive_response(Status.TEMP_UPSTREAM_QUEUE)

        if await self._probe():
            response.add_data(Health(component=self.component, status=HealthStatus.APPLICATION_HEALTHY))
        else:
            response.add_data(Health(component=self.component, status=HealthStatus.APPLICATION_UNHEALTHY))
            response.message = UNHEALTHY_MESSAGE

        await self.sink.post_response(response)

        status = response.data[0].status.value
        if self.metrics:
            self.metrics.record_health_check(status)
        logger.info("health.responded", corr_id=response.corr_id, health=status)
        return response

    async def _probe(self) -> bool:
        try:
            return await self.probe.check()
        except Exception as e:
            logger.warning("health.probe_failed", error=str(e), error_type=type(e).__name__)
            return False


class HealthChecker:
    """
    Health checker for the adapter service.

    Provides:
    - Liveness checks (is the service running?)
    - Readiness checks (can the application and the response sink be reached?)
    """

    def __init__(
        self,
        sink: ResponseSink,
        probe: HealthProbe | None = None,
        service_name: str = "provider-adapter",
        version: str = "0.1.0",
    ):
        self.sink = sink
        self.probe = probe or StaticProbe()
        self.service_name = service_name
        self.version = version

    def _timestamp(self) -> str:
        return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")

    def liveness(self) -> Dict[str, Any]:
        """
        Liveness check - basic health check.

        Returns:
            dict: Health status with service info and timestamp
        """
        return {
            "status": "ok",
            "service": self.service_name,
            "version": self.version,
            "timestamp": self._timestamp(),
        }

    async def readiness(self) -> Dict[str, Any]:
        """
        Readiness check.

        Checks:
        - Application connectivity (health probe)
        - Response sink connectivity

        Returns:
            dict: Readiness status with detailed check results
        """
        checks = {
            "application": await self._check(self.probe.check, "application"),
            "sink": await self._check(self.sink.health_check, "sink"),
        }
        ready = all(check["status"] == "ok" for check in checks.values())

        return {
            "status": "ready" if ready else "not_ready",
            "service": self.service_name,
            "version": self.version,
            "timestamp": self._timestamp(),
            "checks": checks,
        }

    async def _check(self, fn: Callable[[], Awaitable[bool]], name: str) -> Dict[str, Any]:
        try:
            healthy = await fn()
        except Exception as e:
            logger.warning("readiness_check_failed", check=name, error=str(e))
            return {"status": "error", "error": str(e)}
        return {"status": "ok" if healthy else "error"}
