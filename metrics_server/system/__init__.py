"""System routes: liveness and Prometheus scrape."""

from metrics_server.system.routes import router

__all__ = ["router"]
