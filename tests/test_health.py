"""
Tests for health-check responses and the liveness/readiness endpoints.
"""
import pytest
from fastapi.testclient import TestClient
from provider_adapter.event_models import Event, HealthStatus, Status
from provider_adapter.health import (
    CallableProbe, HealthChecker, HealthCheckResponder, StaticProbe, UNHEALTHY_MESSAGE,
)
from provider_adapter.main import app
from provider_adapter.metrics import Metrics
from provider_adapter.sinks.memory import InMemorySink

client = TestClient(app)


@pytest.mark.asyncio
async def test_healthy_response():
    """Test a passing probe yields one HEALTHY record and no message."""
    sink = InMemorySink()
    responder = HealthCheckResponder(sink, StaticProbe(healthy=True))
    request = Event(health_check=True)

    response = await responder.respond(request)

    assert sink.posted == [response]
    assert response.corr_id == request.corr_id
    assert response.status == Status.TEMP_UPSTREAM_QUEUE
    assert len(response.data) == 1
    assert response.data[0].component == "adapter"
    assert response.data[0].status == HealthStatus.APPLICATION_HEALTHY
    assert response.message is None


@pytest.mark.asyncio
async def test_unhealthy_response():
    """Test a failing probe yields one UNHEALTHY record and a message."""
    sink = InMemorySink()
    responder = HealthCheckResponder(sink, StaticProbe(healthy=False))

    response = await responder.respond(Event(health_check=True))

    assert sink.posted == [response]
    assert response.status == Status.TEMP_UPSTREAM_QUEUE
    assert len(response.data) == 1
    assert response.data[0].status == HealthStatus.APPLICATION_UNHEALTHY
    assert response.message == UNHEALTHY_MESSAGE


@pytest.mark.asyncio
async def test_probe_exception_is_unhealthy():
    def broken():
        raise ConnectionError("application down")

    sink = InMemorySink()
    response = await HealthCheckResponder(sink, CallableProbe(broken)).respond(Event(health_check=True))

    assert response.data[0].status == HealthStatus.APPLICATION_UNHEALTHY
    assert len(sink.posted) == 1


@pytest.mark.asyncio
async def test_callable_probe_async():
    async def reachable():
        return True

    assert await CallableProbe(reachable).check() is True
    assert await CallableProbe(lambda: 0).check() is False


@pytest.mark.asyncio
async def test_repeated_checks_are_identical():
    """Test two checks of the same event with the same outcome match, apart from timestamps."""
    sink = InMemorySink()
    responder = HealthCheckResponder(sink, StaticProbe(healthy=False), component="vigo-adapter")
    request = Event(health_check=True)

    first = await responder.respond(request)
    second = await responder.respond(request)

    exclude = {"time": True, "data": {0: {"time"}}}
    assert first.model_dump(exclude=exclude) == second.model_dump(exclude=exclude)
    assert first.data[0].component == "vigo-adapter"
    assert len(sink.posted) == 2


@pytest.mark.asyncio
async def test_health_metrics():
    metrics = Metrics()
    responder = HealthCheckResponder(InMemorySink(), StaticProbe(), metrics=metrics)

    await responder.respond(Event(health_check=True))

    assert metrics.registry.get_sample_value(
        "adapter_health_checks_total", {"status": "APPLICATION_HEALTHY"}
    ) == 1.0


@pytest.mark.asyncio
async def test_readiness_not_ready_when_probe_fails():
    checker = HealthChecker(InMemorySink(), StaticProbe(healthy=False))

    result = await checker.readiness()

    assert result["status"] == "not_ready"
    assert result["checks"]["application"]["status"] == "error"
    assert result["checks"]["sink"]["status"] == "ok"


def test_health_liveness():
    """Test liveness health check."""
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["service"] == "provider-adapter"
    assert data["version"] == "0.1.0"
    assert data["timestamp"].endswith("Z")


def test_health_readiness():
    """Test readiness health check."""
    r = client.get("/health/ready")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ready"
    assert set(data["checks"]) == {"application", "sink"}


def test_metrics_endpoint():
    """Test Prometheus metrics endpoint."""
    client.get("/health")
    r = client.get("/metrics")
    assert r.status_code == 200
    content = r.text
    assert "http_requests_total" in content
    assert "http_request_duration_seconds" in content
    assert "app_up" in content


def test_correlation_id_propagation():
    """Test that provided correlation ID is propagated."""
    correlation_id = "test-correlation-id-123"
    r = client.get("/health", headers={"x-correlation-id": correlation_id})
    assert r.headers["x-correlation-id"] == correlation_id
    assert "x-correlation-id" in client.get("/health").headers


def test_service_name_shared_by_logging_and_metrics():
    """Test metrics label the same service name that logging stamps."""
    from provider_adapter.logging import SERVICE_NAME

    metrics = Metrics()
    assert metrics.service_name == SERVICE_NAME
    assert metrics.registry.get_sample_value(
        "app_up", {"service": SERVICE_NAME, "version": "0.1.0"}
    ) == 1.0
    assert client.get("/health").json()["service"] == SERVICE_NAME
