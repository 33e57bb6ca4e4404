"""Process entrypoint running the application under uvicorn."""

from __future__ import annotations

import socket

import uvicorn

from metrics_server.lib.logger import get_logger

logger = get_logger(__name__)


class MetricsServer(uvicorn.Server):
    """uvicorn server that announces its URLs once the socket is bound."""

    async def startup(self, sockets: list[socket.socket] | None = None) -> None:
        # A failed bind exits the process from inside ``startup``.
        await super().startup(sockets=sockets)
        if self.should_exit:
            return
        base_url = f"http://localhost:{self.config.port}"
        logger.info("Metrics server running on %s", base_url)
        logger.info("Metrics available at %s/metrics", base_url)


def run() -> None:
    from metrics_server.main import app, settings

    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_config=None,
        log_level=settings.log_level.lower(),
    )
    MetricsServer(config).run()
