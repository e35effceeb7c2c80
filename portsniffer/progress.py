"""Progress reporting for scans: one ``advance`` per finished port."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, TextIO

from tqdm import tqdm


class ProgressReporter(ABC):
    """Receives a signal each time a port reaches its terminal outcome."""

    @abstractmethod
    def advance(self, count: int = 1) -> None:
        raise NotImplementedError

    def close(self, message: Optional[str] = None) -> None:
        """Called once the scan has ended; ``message`` is set only on success."""


class NullProgress(ProgressReporter):
    def advance(self, count: int = 1) -> None:
        pass


class CountingProgress(ProgressReporter):
    """Keep a running count of finished ports."""

    def __init__(self) -> None:
        self.count = 0

    def advance(self, count: int = 1) -> None:
        self.count += count


class TqdmProgress(ProgressReporter):
    """Terminal progress bar with elapsed time and ETA."""

    BAR_FORMAT = "[{elapsed}] {desc} {bar:40} {n_fmt}/{total_fmt} ({remaining})"

    def __init__(
        self,
        total: int,
        description: str = "Scanning",
        *,
        file: Optional[TextIO] = None,
    ) -> None:
        self._bar = tqdm(
            total=total,
            desc=description,
            unit="port",
            bar_format=self.BAR_FORMAT,
            file=file,
            leave=True,
        )

    @property
    def position(self) -> int:
        return self._bar.n

    def advance(self, count: int = 1) -> None:
        self._bar.update(count)

    def close(self, message: Optional[str] = None) -> None:
        if message:
            self._bar.set_description_str(message)
        self._bar.close()


__all__ = ["CountingProgress", "NullProgress", "ProgressReporter", "TqdmProgress"]
