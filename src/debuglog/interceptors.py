"""
Interceptors for capturing standard library and third-party logs.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .core import LogSink, get_sink, level_for_stdlib


class RedirectStdLibHandler(logging.Handler):
    """
    Redirect standard library logging records into a LogSink.

    DEBUG/INFO records become default lines, WARNING becomes a warning and
    ERROR/CRITICAL an error, so third-party warnings also land in logs/errors.
    """

    def __init__(self, sink: Optional[LogSink] = None, level: int = logging.NOTSET):
        super().__init__(level)
        self._sink = sink

    def emit(self, record: logging.LogRecord) -> None:
        try:
            # Skip structlog's own records to avoid writing the same event twice
            if "structlog" in record.name:
                return

            msg = self.format(record)
            logger_name = self._simplify_logger_name(record.name)
            sink = self._sink or get_sink()
            sink.write(level_for_stdlib(record.levelno), f"{logger_name}: {msg}")
        except Exception:
            self.handleError(record)

    @staticmethod
    def _simplify_logger_name(name: str) -> str:
        """
        Simplify a logger name for display.

        Rules:
        - "" -> "stdlib"
        - "uvicorn.access" -> "uvicorn.access"
        - "a.b.c.d" -> "c.d"
        """
        if not name:
            return "stdlib"
        parts = name.split(".")
        if len(parts) <= 2:
            return name
        return ".".join(parts[-2:])


def intercept_loggers(names: Iterable[str]) -> None:
    """Strip handlers from the named loggers (and their children) so they propagate to root."""
    roots = tuple(names)
    if not roots:
        return

    for logger_name in roots:
        lg = logging.getLogger(logger_name)
        lg.handlers = []
        lg.propagate = True

    # Catch child loggers that were created with their own handlers
    logger_dict = logging.Logger.manager.loggerDict
    for name, logger in logger_dict.items():
        if isinstance(logger, logging.PlaceHolder):
            continue
        if any(name.startswith(root) for root in roots):
            logger.handlers = []
            logger.propagate = True
