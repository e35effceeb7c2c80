"""Admission gate bounding the number of probes in flight."""

from __future__ import annotations

import asyncio
from types import TracebackType
from typing import Optional, Type


class ConcurrencyLimiter:
    """Counting gate: at most ``limit`` holders at any instant.

    Use as ``async with limiter:``; the slot is released on every exit path,
    cancellation included.
    """

    def __init__(self, limit: int) -> None:
        if limit <= 0:
            raise ValueError("Concurrency must be greater than zero")

        self._limit = limit
        self._semaphore = asyncio.Semaphore(limit)
        self._in_flight = 0
        self._peak = 0

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def in_flight(self) -> int:
        return self._in_flight

    @property
    def peak(self) -> int:
        """Highest number of simultaneous holders observed so far."""
        return self._peak

    async def acquire(self) -> None:
        await self._semaphore.acquire()
        self._in_flight += 1
        if self._in_flight > self._peak:
            self._peak = self._in_flight

    def release(self) -> None:
        self._in_flight -= 1
        self._semaphore.release()

    async def __aenter__(self) -> "ConcurrencyLimiter":
        await self.acquire()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.release()


__all__ = ["ConcurrencyLimiter"]
