"""Process-wide Prometheus registry and the default runtime collectors."""

from __future__ import annotations

import asyncio
import contextlib
import threading
import weakref

from prometheus_client import (
    CollectorRegistry,
    GCCollector,
    Gauge,
    PlatformCollector,
    ProcessCollector,
)

from metrics_server.lib.logger import get_logger

logger = get_logger(__name__)

REGISTRY = CollectorRegistry()

DEFAULT_LAG_INTERVAL = 0.5


class EventLoopLagMonitor:
    """Measure how late the running event loop wakes up from a timed sleep."""

    def __init__(self, gauge: Gauge, interval: float = DEFAULT_LAG_INTERVAL) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self._gauge = gauge
        self._interval = interval
        self._task: asyncio.Task[None] | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def sample_once(self) -> float:
        loop = asyncio.get_running_loop()
        started = loop.time()
        await asyncio.sleep(self._interval)
        lag = max(0.0, loop.time() - started - self._interval)
        self._gauge.set(lag)
        return lag

    async def _run(self) -> None:
        while True:
            await self.sample_once()

    def start(self) -> None:
        """Schedule background sampling on the running loop."""

        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="eventloop-lag-monitor")
        logger.debug("Event loop lag sampling started", extra={"interval": self._interval})

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task


_lock = threading.Lock()
_monitors: weakref.WeakKeyDictionary[CollectorRegistry, EventLoopLagMonitor] = weakref.WeakKeyDictionary()


def collect_default_metrics(
    registry: CollectorRegistry = REGISTRY,
    *,
    namespace: str = "",
    interval: float = DEFAULT_LAG_INTERVAL,
) -> EventLoopLagMonitor:
    """Register process, platform, GC and event-loop lag collectors.

    Registration happens once per registry; later calls return the monitor
    created by the first one and ignore their arguments. CPU, memory and file
    descriptor samples are read from ``/proc`` at scrape time, so they are
    only populated on Linux.
    """

    with _lock:
        monitor = _monitors.get(registry)
        if monitor is not None:
            return monitor

        ProcessCollector(namespace=namespace, registry=registry)
        PlatformCollector(registry=registry)
        GCCollector(registry=registry)
        gauge = Gauge(
            "python_eventloop_lag_seconds",
            "Delay between a scheduled event loop wake-up and the time it ran.",
            namespace=namespace,
            registry=registry,
        )
        monitor = EventLoopLagMonitor(gauge, interval=interval)
        _monitors[registry] = monitor

    logger.info("Default metrics registered", extra={"namespace": namespace})
    return monitor
