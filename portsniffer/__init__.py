"""Concurrent TCP connect port scanner."""

__version__ = "1.0.0"
