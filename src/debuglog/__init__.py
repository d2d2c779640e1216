"""
debuglog: thread-safe leveled file logging.

Every message goes to logs/all/<timestamp>.log; warnings and errors also go to
logs/errors/<timestamp>.log. Both files rotate together by size, and old files
are pruned by age and count.

Usage:
    import debuglog

    debuglog.log("started")
    debuglog.log_warning("disk at {}%", 91)
    debuglog.log_error({"job": 7, "status": "failed"})
    debuglog.shutdown()

Library: structlog (bridge), orjson (value rendering), pydantic-settings (config).
"""

from .config import SinkSettings
from .core import (
    LogLevel,
    LogSink,
    SinkState,
    configure,
    configure_logging,
    ensure_log_directories,
    get_logger,
    get_sink,
    install_sink,
    log,
    log_error,
    log_warning,
    shutdown,
)
from .exceptions import DebugLogError, InitializationError, InvalidTimestampFormat
from .retention import RetentionPolicy, SweepResult, should_rotate, sweep_directory
from .timestamps import format_timestamp, parse_timestamp, try_parse_timestamp

__all__ = [
    "DebugLogError",
    "InitializationError",
    "InvalidTimestampFormat",
    "LogLevel",
    "LogSink",
    "RetentionPolicy",
    "SinkSettings",
    "SinkState",
    "SweepResult",
    "configure",
    "configure_logging",
    "ensure_log_directories",
    "format_timestamp",
    "get_logger",
    "get_sink",
    "install_sink",
    "log",
    "log_error",
    "log_warning",
    "parse_timestamp",
    "should_rotate",
    "shutdown",
    "sweep_directory",
    "try_parse_timestamp",
]
