"""Base classes and errors shared by the scanning engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar


T = TypeVar("T")


class ScanError(RuntimeError):
    """Raised when a scanner fails to collect results."""


class ChannelClosedError(ScanError):
    """Raised when an open port is sent after the result receiver is gone."""


@dataclass(slots=True)
class ScanResult:
    """Common result information returned by scanners."""

    duration: float


class Scanner(ABC, Generic[T]):
    """Abstract base class for async scanner implementations."""

    @abstractmethod
    async def scan(self) -> T:
        """Execute the scanner and return a result object."""
        raise NotImplementedError
