"""Bounded channel and single receiver that accumulate open ports."""

from __future__ import annotations

import asyncio
import enum
import logging
from typing import List, Optional, Tuple

from .base import ChannelClosedError, ScanError
from .config import CHANNEL_BUFFER_SIZE

logger = logging.getLogger(__name__)

# Queued after the last port once every sender is finished.
_CLOSED = object()


class CollectorState(enum.Enum):
    IDLE = "idle"
    RECEIVING = "receiving"
    DRAINING = "draining"
    DONE = "done"


class ResultCollector:
    """Receive open ports from many concurrent senders.

    Ports travel through an :class:`asyncio.Queue` of ``buffer_size``
    entries. A sender suspends while the queue is full instead of dropping
    the port. Exactly one receive task reads the queue and is the only code
    that touches the accumulated list, so no lock is needed around it.
    """

    def __init__(self, buffer_size: int = CHANNEL_BUFFER_SIZE) -> None:
        if buffer_size < 1:
            raise ValueError("Channel buffer size must be at least 1")

        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=buffer_size)
        self._state = CollectorState.IDLE
        self._task: Optional[asyncio.Task[Tuple[int, ...]]] = None
        self._open_ports: List[int] = []

    @property
    def state(self) -> CollectorState:
        return self._state

    @property
    def buffer_size(self) -> int:
        return self._queue.maxsize

    def start(self) -> None:
        if self._state is not CollectorState.IDLE:
            raise ScanError("Result collector was already started")
        self._task = asyncio.create_task(self._receive())
        self._state = CollectorState.RECEIVING

    async def send(self, port: int) -> None:
        """Deliver an open port, waiting for buffer space if necessary."""

        if self._state is not CollectorState.RECEIVING:
            raise ChannelClosedError(
                f"Cannot report open port {port}: result channel is {self._state.value}"
            )
        await self._put(port)

    async def close(self) -> Tuple[int, ...]:
        """Close the sending side and return every received port, sorted."""

        if self._state is not CollectorState.RECEIVING:
            raise ScanError(
                f"Cannot close result channel while it is {self._state.value}"
            )
        receiver = self._receiver()
        self._state = CollectorState.DRAINING
        await self._put(_CLOSED)
        return await receiver

    async def abort(self) -> None:
        """Stop the receive loop without producing a result."""

        self._state = CollectorState.DONE
        if self._task is None or self._task.done():
            return
        self._task.cancel()
        await asyncio.gather(self._task, return_exceptions=True)

    def _receiver(self) -> "asyncio.Task[Tuple[int, ...]]":
        if self._task is None or self._task.done():
            raise ChannelClosedError("Result receiver has already stopped")
        return self._task

    async def _put(self, item: object) -> None:
        receiver = self._receiver()
        if not self._queue.full():
            self._queue.put_nowait(item)
            return

        # Buffer is full: wait for space, but give up if the receiver dies
        # while we are suspended.
        put = asyncio.ensure_future(self._queue.put(item))
        try:
            done, _ = await asyncio.wait(
                {put, receiver}, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            put.cancel()
            raise
        if put not in done:
            put.cancel()
            raise ChannelClosedError("Result receiver stopped while a sender was waiting")

    async def _receive(self) -> Tuple[int, ...]:
        while True:
            item = await self._queue.get()
            if item is _CLOSED:
                break
            self._open_ports.append(item)  # type: ignore[arg-type]

        result = tuple(sorted(self._open_ports))
        self._state = CollectorState.DONE
        logger.debug("Collector received %d open port(s)", len(result))
        return result


__all__ = ["CollectorState", "ResultCollector"]
