"""FastAPI application entrypoint for the Prometheus metrics sidecar."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import CollectorRegistry

from metrics_server import __version__
from metrics_server.config import Settings, get_settings
from metrics_server.lib.logger import configure_logging
from metrics_server.lib.metrics import REGISTRY, collect_default_metrics
from metrics_server.system import router as system_router


def create_app(
    settings: Settings | None = None,
    registry: CollectorRegistry | None = None,
) -> FastAPI:
    """Build the application and register default metrics into ``registry``."""

    settings = settings or get_settings()
    registry = REGISTRY if registry is None else registry
    lag_monitor = collect_default_metrics(
        registry,
        namespace=settings.metrics_namespace,
        interval=settings.eventloop_lag_interval,
    )

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        lag_monitor.start()
        try:
            yield
        finally:
            await lag_monitor.stop()

    application = FastAPI(title="Metrics Server", version=__version__, lifespan=lifespan)
    application.state.settings = settings
    application.state.metrics_registry = registry
    application.state.lag_monitor = lag_monitor
    application.include_router(system_router, tags=["system"])
    return application


settings = get_settings()

configure_logging(settings.log_level)
app = create_app(settings)
