"""Asynchronous TCP connect scanner over a port range."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field, asdict
from typing import Awaitable, Callable, Dict, List, Optional, Union

from ..progress import NullProgress, ProgressReporter
from .base import ScanResult, Scanner
from .collector import ResultCollector
from .config import IPAddress, ScanConfig
from .limiter import ConcurrencyLimiter
from .probe import ProbeResult, probe

logger = logging.getLogger(__name__)

ProbeFunc = Callable[[Union[IPAddress, str], int, float], Awaitable[ProbeResult]]


@dataclass(slots=True)
class PortScanResult(ScanResult):
    """Result of a TCP port scan."""

    host: str
    start_port: int
    end_port: int
    open_ports: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


class PortScanner(Scanner[PortScanResult]):
    """Probe every port of a target, with at most ``concurrency`` in flight."""

    def __init__(
        self,
        config: ScanConfig,
        *,
        progress: Optional[ProgressReporter] = None,
        probe_func: ProbeFunc = probe,
    ) -> None:
        self._config = config
        self._progress = progress or NullProgress()
        self._probe = probe_func

    @property
    def config(self) -> ScanConfig:
        return self._config

    async def scan(self) -> PortScanResult:
        config = self._config
        target = config.target
        limiter = ConcurrencyLimiter(config.concurrency)
        collector = ResultCollector(config.channel_buffer_size)

        logger.info(
            "Scanning %s ports %d-%d (%d ports) with %d concurrent probes",
            target.host,
            target.start_port,
            target.end_port,
            len(target),
            config.concurrency,
        )

        start_time = time.perf_counter()
        collector.start()
        tasks = [
            asyncio.create_task(self._check_port(port, limiter, collector))
            for port in target.ports()
        ]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            await collector.abort()
            raise

        open_ports = await collector.close()
        duration = time.perf_counter() - start_time

        logger.info(
            "Finished %s in %.2fs: %d open port(s)",
            target.host,
            duration,
            len(open_ports),
        )
        logger.debug("Peak concurrent probes: %d", limiter.peak)

        return PortScanResult(
            host=target.host,
            start_port=target.start_port,
            end_port=target.end_port,
            open_ports=list(open_ports),
            duration=duration,
        )

    async def _check_port(
        self,
        port: int,
        limiter: ConcurrencyLimiter,
        collector: ResultCollector,
    ) -> None:
        async with limiter:
            result = await self._probe(self._config.target.address, port, self._config.timeout)
            if result.is_open:
                await collector.send(port)
            self._progress.advance()


__all__ = ["PortScanResult", "PortScanner"]
