"""Command line entry point for the portsniffer scanner."""

from __future__ import annotations

import argparse
import asyncio
import ipaddress
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .progress import NullProgress, ProgressReporter, TqdmProgress
from .scanners import (
    DEFAULT_CONCURRENCY,
    MAX_CONCURRENCY,
    PortScanResult,
    PortScanner,
    ScanConfig,
    ScanError,
    Target,
)
from .scanners.config import MAX_PORT, MIN_PORT

COMPLETED_MESSAGE = "Scan completed successfully"


def parse_address(value: str) -> str:
    """Validate an IPv4 or IPv6 address string."""

    try:
        return str(ipaddress.ip_address(value.strip()))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"'{value}' is not a valid IP address") from exc


def parse_port(value: str) -> int:
    try:
        port = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"'{value}' is not a valid port") from exc
    if not MIN_PORT <= port <= MAX_PORT:
        raise argparse.ArgumentTypeError(
            f"port must be between {MIN_PORT} and {MAX_PORT}"
        )
    return port


def parse_concurrency(value: str) -> int:
    try:
        concurrency = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"'{value}' is not a number") from exc
    if not 1 <= concurrency <= MAX_CONCURRENCY:
        raise argparse.ArgumentTypeError(
            f"concurrency must be between 1 and {MAX_CONCURRENCY}"
        )
    return concurrency


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="portsniffer",
        description="Simple concurrent TCP port scanner.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--ip",
        required=True,
        type=parse_address,
        help="Target IP address (IPv4 or IPv6).",
    )
    parser.add_argument(
        "-c",
        "--concurrency",
        type=parse_concurrency,
        default=DEFAULT_CONCURRENCY,
        help=f"Number of concurrent scans (1-{MAX_CONCURRENCY}, default {DEFAULT_CONCURRENCY}).",
    )
    parser.add_argument(
        "-s",
        "--start_port",
        type=parse_port,
        default=MIN_PORT,
        help=f"First port to scan (default: {MIN_PORT}).",
    )
    parser.add_argument(
        "-e",
        "--end_port",
        type=parse_port,
        default=MAX_PORT,
        help=f"Last port to scan (default: {MAX_PORT}).",
    )
    parser.add_argument(
        "--format",
        choices={"json", "text"},
        default="text",
        help="Output format (default: text).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional file to write the scan results to (JSON is always used).",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not display the progress bar.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable informational log messages.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable verbose debug logging.",
    )
    return parser


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.start_port > args.end_port:
        parser.error(
            f"start_port ({args.start_port}) cannot be greater than end_port ({args.end_port})"
        )
    return args


def _build_config(args: argparse.Namespace) -> ScanConfig:
    target = Target.parse(args.ip, args.start_port, args.end_port)
    return ScanConfig(target=target, concurrency=args.concurrency)


def _make_progress(args: argparse.Namespace, config: ScanConfig) -> ProgressReporter:
    if args.no_progress:
        return NullProgress()
    return TqdmProgress(len(config.target), f"Scanning {config.target.host}")


async def _dispatch(config: ScanConfig, progress: ProgressReporter) -> PortScanResult:
    scanner = PortScanner(config, progress=progress)
    return await scanner.scan()


def _configure_logging(args: argparse.Namespace) -> None:
    if args.debug:
        level = logging.DEBUG
    elif args.verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _format_result(result: PortScanResult, fmt: str) -> str:
    if fmt == "json":
        return json.dumps(result.to_dict(), indent=2, sort_keys=True)
    return _format_text(result)


def _format_text(result: PortScanResult) -> str:
    if not result.open_ports:
        return "No open ports found."
    lines = ["Open ports:"]
    lines.extend(str(port) for port in result.open_ports)
    return "\n".join(lines)


def run(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    _configure_logging(args)

    config = _build_config(args)
    progress = _make_progress(args, config)
    completed = False
    try:
        result = asyncio.run(_dispatch(config, progress))
        completed = True
    except ScanError as exc:
        logging.error("Scan aborted: %s", exc)
        return 2
    finally:
        progress.close(COMPLETED_MESSAGE if completed else None)

    print(_format_result(result, args.format))

    if args.output:
        args.output.write_text(json.dumps(result.to_dict(), indent=2, sort_keys=True) + "\n")

    return 0


def main(argv: Sequence[str] | None = None) -> int:
    exit_code = run(argv)
    if argv is None:
        sys.exit(exit_code)
    return exit_code


__all__ = ["main", "run", "parse_address", "parse_concurrency", "parse_port"]
