"""
Output targets for rendered lines.

The console mirror is a best-effort collaborator; the file stream is the
durable one. Neither does any locking: LogSink serializes all calls.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Any, Optional

from .formatters import ConsoleFormatter

# =============================================================================
# Sink Abstraction (Strategy Pattern)
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for line sinks."""

    @abstractmethod
    def emit(self, level_label: str, line: str) -> None:
        """Emit one rendered line."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...


class ConsoleSink(BaseSink):
    """Console mirror with level colors.

    Args:
        stream: Output stream (default: sys.stdout, resolved on each emit)
        use_color: Force colors on/off; None detects a TTY
    """

    def __init__(self, stream: Any = None, use_color: Optional[bool] = None):
        self._stream = stream
        self._use_color = use_color

    @property
    def stream(self) -> Any:
        return self._stream or sys.stdout

    def emit(self, level_label: str, line: str) -> None:
        stream = self.stream
        use_color = self._use_color
        if use_color is None:
            use_color = bool(getattr(stream, "isatty", lambda: False)())
        stream.write(ConsoleFormatter.format(level_label, line, use_color=use_color) + "\n")
        stream.flush()

    def close(self) -> None:
        pass


class LogFileStream:
    """One append-only log file plus its byte counter.

    The counter counts encoded bytes, line breaks included. On ``open`` it
    starts from the size already on disk.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._file: Optional[IO[str]] = None
        self._bytes_written = 0

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_open(self) -> bool:
        return self._file is not None

    @property
    def bytes_written(self) -> int:
        return self._bytes_written

    def open(self) -> None:
        # newline="" keeps "\n" as one byte on every platform
        self._file = open(self._path, "a", encoding="utf-8", errors="replace", newline="")
        self._bytes_written = self._path.stat().st_size

    def write_line(self, line: str) -> int:
        if self._file is None:
            raise ValueError(f"log stream {self._path} is not open")
        data = line + "\n"
        self._file.write(data)
        self._file.flush()
        size = len(data.encode("utf-8", errors="replace"))
        self._bytes_written += size
        return size

    def close(self) -> None:
        if self._file is None:
            return
        try:
            self._file.close()
        finally:
            self._file = None
