"""Health and Prometheus scrape routes."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from metrics_server.lib.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


def get_metrics_registry(request: Request) -> CollectorRegistry:
    registry: CollectorRegistry | None = getattr(request.app.state, "metrics_registry", None)
    if registry is None:
        raise RuntimeError("Metrics registry not configured on application state")
    return registry


@router.get("/health", summary="Health check")
async def health_check() -> JSONResponse:
    """Return liveness response for uptime monitoring."""
    return JSONResponse(content={"status": "healthy"})


@router.get("/metrics", summary="Prometheus scrape endpoint")
async def metrics_endpoint(request: Request) -> Response:
    """Serialize the registry in the Prometheus text exposition format.

    Any failure while collecting is answered with a 500 carrying the raw error
    text; the registry itself is left untouched.
    """

    try:
        payload = generate_latest(get_metrics_registry(request))
    except Exception as exc:  # noqa: BLE001
        logger.exception("Metrics serialization failed")
        return PlainTextResponse(str(exc), status_code=500)
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)
