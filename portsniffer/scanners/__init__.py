"""Scanning engine exposed by the :mod:`portsniffer` package."""

from .base import ChannelClosedError, ScanError
from .collector import CollectorState, ResultCollector
from .config import (
    CHANNEL_BUFFER_SIZE,
    DEFAULT_CONCURRENCY,
    DEFAULT_TIMEOUT,
    MAX_CONCURRENCY,
    ConfigError,
    ScanConfig,
    Target,
)
from .limiter import ConcurrencyLimiter
from .ports import PortScanner, PortScanResult
from .probe import ProbeResult, ProbeStatus

__all__ = [
    "CHANNEL_BUFFER_SIZE",
    "ChannelClosedError",
    "CollectorState",
    "ConcurrencyLimiter",
    "ConfigError",
    "DEFAULT_CONCURRENCY",
    "DEFAULT_TIMEOUT",
    "MAX_CONCURRENCY",
    "PortScanResult",
    "PortScanner",
    "ProbeResult",
    "ProbeStatus",
    "ScanConfig",
    "ScanError",
    "Target",
]
