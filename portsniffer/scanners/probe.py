"""Single-port TCP connect probe."""

from __future__ import annotations

import asyncio
import enum
import logging
from dataclasses import dataclass
from typing import Optional, Union

from .config import DEFAULT_TIMEOUT, IPAddress

logger = logging.getLogger(__name__)


class ProbeStatus(enum.Enum):
    OPEN = "open"
    CLOSED = "closed"
    TIMED_OUT = "timeout"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """Terminal outcome of probing one port."""

    port: int
    status: ProbeStatus
    reason: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.status is ProbeStatus.OPEN

    @classmethod
    def open(cls, port: int) -> "ProbeResult":
        return cls(port, ProbeStatus.OPEN)

    @classmethod
    def closed(cls, port: int) -> "ProbeResult":
        return cls(port, ProbeStatus.CLOSED, "refused")

    @classmethod
    def timed_out(cls, port: int) -> "ProbeResult":
        return cls(port, ProbeStatus.TIMED_OUT, "timeout")

    @classmethod
    def error(cls, port: int, reason: str) -> "ProbeResult":
        return cls(port, ProbeStatus.ERROR, reason)


async def probe(
    address: Union[IPAddress, str],
    port: int,
    timeout: float = DEFAULT_TIMEOUT,
) -> ProbeResult:
    """Attempt one TCP connection to ``address:port`` within ``timeout`` seconds.

    Network failures are converted into a :class:`ProbeResult`; they never
    propagate to the caller. There is no retry, a single attempt decides.
    """

    host = str(address)
    try:
        reader, writer = await asyncio.wait_for(
            asyncio.open_connection(host, port),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        logger.debug("%s:%d timed out after %.1fs", host, port, timeout)
        return ProbeResult.timed_out(port)
    except ConnectionRefusedError:
        logger.debug("%s:%d refused", host, port)
        return ProbeResult.closed(port)
    except OSError as exc:
        reason = f"{exc.__class__.__name__}: {exc.strerror or exc}"
        logger.debug("%s:%d failed: %s", host, port, reason)
        return ProbeResult.error(port, reason)

    writer.close()
    try:
        await writer.wait_closed()
    except ConnectionError:
        pass
    logger.debug("%s:%d open", host, port)
    return ProbeResult.open(port)


__all__ = ["ProbeResult", "ProbeStatus", "probe"]
