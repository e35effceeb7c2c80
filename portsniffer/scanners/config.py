"""Scan target and engine configuration."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import Iterator, Union

MIN_PORT = 1
MAX_PORT = 65535

DEFAULT_CONCURRENCY = 50
MAX_CONCURRENCY = 100

# Connect timeout per probe, in seconds.
DEFAULT_TIMEOUT = 3.0

# Capacity of the channel carrying open ports to the collector.
CHANNEL_BUFFER_SIZE = 250

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class ConfigError(ValueError):
    """Raised when a target or scan configuration is invalid."""


def validate_port(port: int) -> int:
    if not MIN_PORT <= port <= MAX_PORT:
        raise ConfigError(
            f"port {port} is outside the valid range ({MIN_PORT}-{MAX_PORT})"
        )
    return port


@dataclass(frozen=True, slots=True)
class Target:
    """An IP address and the inclusive port range to probe on it."""

    address: IPAddress
    start_port: int = MIN_PORT
    end_port: int = MAX_PORT

    def __post_init__(self) -> None:
        validate_port(self.start_port)
        validate_port(self.end_port)
        if self.start_port > self.end_port:
            raise ConfigError(
                f"start port ({self.start_port}) cannot be greater than "
                f"end port ({self.end_port})"
            )

    @classmethod
    def parse(cls, address: str, start_port: int = MIN_PORT, end_port: int = MAX_PORT) -> "Target":
        try:
            parsed = ipaddress.ip_address(address.strip())
        except ValueError as exc:
            raise ConfigError(f"invalid IP address '{address}'") from exc
        return cls(parsed, start_port, end_port)

    @property
    def host(self) -> str:
        return str(self.address)

    def ports(self) -> Iterator[int]:
        return iter(range(self.start_port, self.end_port + 1))

    def __len__(self) -> int:
        return self.end_port - self.start_port + 1


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Everything the scan engine needs; built once, read-only afterwards."""

    target: Target
    concurrency: int = DEFAULT_CONCURRENCY
    timeout: float = DEFAULT_TIMEOUT
    channel_buffer_size: int = CHANNEL_BUFFER_SIZE

    def __post_init__(self) -> None:
        if not 1 <= self.concurrency <= MAX_CONCURRENCY:
            raise ConfigError(
                f"concurrency must be between 1 and {MAX_CONCURRENCY}"
            )
        if self.timeout <= 0:
            raise ConfigError("timeout must be greater than zero")
        if self.channel_buffer_size < 1:
            raise ConfigError("channel buffer size must be at least 1")


__all__ = [
    "CHANNEL_BUFFER_SIZE",
    "ConfigError",
    "DEFAULT_CONCURRENCY",
    "DEFAULT_TIMEOUT",
    "IPAddress",
    "MAX_CONCURRENCY",
    "MAX_PORT",
    "MIN_PORT",
    "ScanConfig",
    "Target",
    "validate_port",
]
