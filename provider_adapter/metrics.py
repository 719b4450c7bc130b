"""
Prometheus metrics for the provider adapter.
"""
from prometheus_client import Counter, Histogram, Gauge, Info, CollectorRegistry
from .logging import SERVICE_NAME


class Metrics:
    """
    Centralized metrics for the adapter service.
    """

    def __init__(self, service_name: str = SERVICE_NAME, version: str = "0.1.0", registry=None):
        self.service_name = service_name
        self.version = version
        self.registry = registry or CollectorRegistry()

        # HTTP Metrics
        self.http_requests_total = Counter(
            "http_requests_total",
            "Total HTTP requests",
            ["service", "method", "path", "status"],
            registry=self.registry,
        )

        self.http_request_duration = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["service", "method", "path"],
            registry=self.registry,
        )

        self.http_requests_active = Gauge(
            "http_requests_active",
            "Number of active HTTP requests",
            ["service"],
            registry=self.registry,
        )
        self.http_requests_active.labels(service=service_name).set(0)

        # Application Info
        self.app_info = Info(
            "app",
            "Application information",
            registry=self.registry,
        )
        self.app_info.info({"service": service_name, "version": version})

        self.app_up = Gauge(
            "app_up",
            "Application up status (1=up, 0=down)",
            ["service", "version"],
            registry=self.registry,
        )
        self.app_up.labels(service=service_name, version=version).set(1)

        # Adapter metrics
        self.events_total = Counter(
            "adapter_events_total",
            "Events handled by the dispatcher, by action and outcome status",
            ["action", "status"],
            registry=self.registry,
        )

        self.health_checks_total = Counter(
            "adapter_health_checks_total",
            "Health check responses, by reported health status",
            ["status"],
            registry=self.registry,
        )

    def record_event(self, action: str | None, status: str):
        self.events_total.labels(action=action or "", status=status).inc()

    def record_health_check(self, status: str):
        self.health_checks_total.labels(status=status).inc()
