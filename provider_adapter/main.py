"""
Tilganger provider adapter - receives provider events and posts responses upstream.

Features:
- Action dispatch to registered handlers
- Health-check event responses
- Structured logging with correlation IDs
- Prometheus metrics
- Liveness and readiness probes
"""
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app
from . import __version__
from .config import get_settings
from .logging import setup_logging, get_logger, SERVICE_NAME
from .api.router import router
from starlette.exceptions import HTTPException
from .middleware import (
    CorrelationIdMiddleware, ErrorHandlerMiddleware, MetricsMiddleware, http_exception_handler,
)
from .metrics import Metrics
from .health import HealthChecker, HealthCheckResponder, StaticProbe
from .sinks import create_default_sink
from .services.dispatcher import EventDispatcher

settings = get_settings()

setup_logging(json_output=settings.LOG_JSON, service_name=SERVICE_NAME)
logger = get_logger()

metrics = Metrics(service_name=SERVICE_NAME, version=__version__)

# Replace the probe with one that checks the source application
probe = StaticProbe(healthy=True)
sink = create_default_sink()
health_checker = HealthChecker(sink, probe, service_name=SERVICE_NAME, version=__version__)
dispatcher = EventDispatcher(
    sink,
    health=HealthCheckResponder(sink, probe, metrics=metrics),
    metrics=metrics,
)

app = FastAPI(
    title="Tilganger Provider Adapter",
    version=__version__,
    description="Provider-side adapter answering tilganger events",
)
app.state.sink = sink
app.state.dispatcher = dispatcher

# Last added runs first: correlation ID, then metrics, then error handling
app.add_middleware(ErrorHandlerMiddleware)
app.add_middleware(MetricsMiddleware, metrics=metrics)
app.add_middleware(CorrelationIdMiddleware)
app.add_exception_handler(HTTPException, http_exception_handler)

app.include_router(router)

metrics_app = make_asgi_app(registry=metrics.registry)
app.mount("/metrics", metrics_app)


@app.get("/health")
async def health():
    """
    Liveness probe - basic health check.

    Returns 200 if service is running.
    """
    logger.debug("health_check_liveness")
    return health_checker.liveness()


@app.get("/health/ready")
async def health_ready():
    """
    Readiness probe.

    Returns:
        200: Application and response sink are reachable
        503: Service is not ready
    """
    logger.debug("health_check_readiness")
    result = await health_checker.readiness()
    status_code = 200 if result["status"] == "ready" else 503
    return JSONResponse(result, status_code=status_code)


@app.on_event("startup")
async def startup_event():
    logger.info(
        "service_starting",
        version=__version__,
        env=settings.ENV,
        sink=type(sink).__name__,
        actions=[a.value for a in dispatcher.registry.actions()],
    )


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("service_stopping")
    metrics.app_up.labels(service=SERVICE_NAME, version=__version__).set(0)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "provider_adapter.main:app",
        host="0.0.0.0",
        port=settings.SERVICE_PORT,
    )
