import asyncio
import socket
import sys
from pathlib import Path

import pytest

# Ensure the package root is importable when tests run without installation
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def unused_tcp_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    yield port


@pytest.fixture
def fake_probe_factory():
    """Build probe stand-ins that report a fixed set of ports as open."""

    from portsniffer.scanners.probe import ProbeResult

    def factory(open_ports=(), seen=None):
        open_ports = set(open_ports)

        async def fake_probe(address, port, timeout):
            if seen is not None:
                seen.append(port)
            await asyncio.sleep(0)
            if port in open_ports:
                return ProbeResult.open(port)
            return ProbeResult.closed(port)

        return fake_probe

    return factory
