"""
Core sink lifecycle and process-wide facade.

A LogSink owns one lock, the two live file streams ("all" and "errors") and
their byte counters. Every state change (lazy init, write, rotation, retention,
configure, shutdown) happens while holding that lock, so lines appear on disk
in lock-acquisition order and a configure never splits a write across epochs.

State machine:
    UNINITIALIZED --write/configure--> ACTIVE
    ACTIVE --write under threshold--> ACTIVE
    ACTIVE --rotation / shutdown--> UNINITIALIZED

A rotation that would reopen the file name just closed (same second) is held
back: the pair stays open and rotates on the first write of a later second.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional

import structlog
from structlog.typing import EventDict, WrappedLogger

from .config import SinkSettings, settings as app_settings
from .constants import ALL_DIR_NAME, ERRORS_DIR_NAME, LOG_EXTENSION, LOGS_DIR_NAME
from .exceptions import InitializationError
from .formatters import format_message, render_event, render_line, single_line
from .retention import RetentionPolicy, SweepResult
from .sinks import BaseSink, ConsoleSink, LogFileStream
from .timestamps import format_timestamp, to_local_naive

Clock = Callable[[], datetime]


class LogLevel(Enum):
    """The three fixed levels; the value is the label written in each line."""

    DEFAULT = "LOG"
    WARNING = "WARNING"
    ERROR = "ERROR"

    @property
    def label(self) -> str:
        return self.value

    @property
    def mirrors_to_errors(self) -> bool:
        return self is not LogLevel.DEFAULT


class SinkState(Enum):
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    SHUTTING_DOWN = "shutting_down"


# =============================================================================
# Directory Bootstrap
# =============================================================================


def ensure_log_directories(root: str | Path) -> tuple[Path, Path]:
    """Create ``<root>/logs/all`` and ``<root>/logs/errors`` if absent.

    Raises:
        InitializationError: if a directory cannot be created.
    """
    logs_dir = Path(root) / LOGS_DIR_NAME
    all_dir = logs_dir / ALL_DIR_NAME
    errors_dir = logs_dir / ERRORS_DIR_NAME
    try:
        all_dir.mkdir(parents=True, exist_ok=True)
        errors_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise InitializationError(path=str(logs_dir), reason=str(exc)) from exc
    return all_dir, errors_dir


# =============================================================================
# Log Sink
# =============================================================================


class LogSink:
    """Thread-safe two-stream file sink with size rotation and retention.

    Construct one per process, share it, and call :meth:`shutdown` at teardown.

    Args:
        settings: Settings for the first epoch (default: ``debuglog.config.settings.sink``)
        console: Console mirror (default: colored stdout); used only when
            ``settings.console`` is true
        clock: Zero-argument callable returning "now" (default: ``datetime.now``)
    """

    def __init__(
        self,
        settings: Optional[SinkSettings] = None,
        *,
        console: Optional[BaseSink] = None,
        clock: Optional[Clock] = None,
    ):
        self._lock = threading.Lock()
        self._settings = settings or app_settings.sink
        self._policy = RetentionPolicy(self._settings)
        self._console = console or ConsoleSink()
        self._clock = clock or datetime.now
        self._state = SinkState.UNINITIALIZED
        self._all_stream: Optional[LogFileStream] = None
        self._errors_stream: Optional[LogFileStream] = None
        self._last_sweep: list[SweepResult] = []
        self._rotation_pending = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def settings(self) -> SinkSettings:
        return self._settings

    @property
    def state(self) -> SinkState:
        with self._lock:
            return self._state

    @property
    def is_initialized(self) -> bool:
        with self._lock:
            return self._state is SinkState.ACTIVE

    @property
    def current_files(self) -> Optional[tuple[Path, Path]]:
        """Paths of the active ("all", "errors") pair, or None between epochs."""
        with self._lock:
            if self._all_stream is None or self._errors_stream is None:
                return None
            return self._all_stream.path, self._errors_stream.path

    @property
    def bytes_written(self) -> tuple[int, int]:
        """Bytes written to ("all", "errors") since the pair was opened."""
        with self._lock:
            return (
                self._all_stream.bytes_written if self._all_stream else 0,
                self._errors_stream.bytes_written if self._errors_stream else 0,
            )

    @property
    def last_sweep(self) -> list[SweepResult]:
        """Results of the most recent retention sweep (one per directory)."""
        with self._lock:
            return list(self._last_sweep)

    def write(self, level: LogLevel, message: str) -> None:
        """Append one line to the "all" stream and, for warnings/errors, the "errors" stream.

        Raises:
            InitializationError: if the log files cannot be created on lazy init.
        """
        with self._lock:
            if not self._settings.enabled:
                return
            now = self._now()
            timestamp = format_timestamp(now)
            if self._rotation_pending and not self._is_current_epoch(timestamp):
                self._rotate(now)
            if self._state is not SinkState.ACTIVE:
                self._initialize(now)

            line = render_line(level.label, timestamp, single_line(message))

            try:
                self._all_stream.write_line(line)
                if level.mirrors_to_errors:
                    self._errors_stream.write_line(line)
            except OSError:
                # Broken handle: drop the pair so the next write re-initializes
                self._close_streams()
                return

            self._mirror(level, line)

            if self._policy.should_rotate(self._all_stream.bytes_written, self._errors_stream.bytes_written):
                if self._is_current_epoch(timestamp):
                    # The next pair would get this very name; wait for the clock
                    self._rotation_pending = True
                else:
                    self._rotate(now)

    def log(self, message: Any, *args: Any, **kwargs: Any) -> None:
        self.write(LogLevel.DEFAULT, format_message(message, *args, **kwargs))

    def log_warning(self, message: Any, *args: Any, **kwargs: Any) -> None:
        self.write(LogLevel.WARNING, format_message(message, *args, **kwargs))

    def log_error(self, message: Any, *args: Any, **kwargs: Any) -> None:
        self.write(LogLevel.ERROR, format_message(message, *args, **kwargs))

    def configure(self, settings: SinkSettings) -> None:
        """Start a new epoch under ``settings``.

        Open streams are closed without pruning, a fresh pair is opened under
        the new root, then both directories are swept. The fresh pair counts
        towards ``max_log_files_amount`` but is never deleted.

        Raises:
            InitializationError: if the new root cannot be prepared.
        """
        with self._lock:
            self._close_streams()
            self._settings = settings
            self._policy = RetentionPolicy(settings)
            if not settings.enabled:
                return
            now = self._now()
            self._initialize(now)
            directories = (self._all_stream.path.parent, self._errors_stream.path.parent)
            self._sweep(now, directories, protected=(self._all_stream.path, self._errors_stream.path))

    def shutdown(self) -> None:
        """Close both streams. Calling it on a closed sink is a no-op."""
        with self._lock:
            if self._state is SinkState.UNINITIALIZED:
                return
            self._state = SinkState.SHUTTING_DOWN
            self._close_streams()

    def __enter__(self) -> "LogSink":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.shutdown()

    # ------------------------------------------------------------------
    # Internals (lock held)
    # ------------------------------------------------------------------

    def _now(self) -> datetime:
        return to_local_naive(self._clock())

    def _initialize(self, now: datetime) -> None:
        all_dir, errors_dir = ensure_log_directories(self._settings.root_path)
        file_name = format_timestamp(now) + LOG_EXTENSION
        all_stream = LogFileStream(all_dir / file_name)
        errors_stream = LogFileStream(errors_dir / file_name)
        try:
            all_stream.open()
            errors_stream.open()
        except OSError as exc:
            all_stream.close()
            errors_stream.close()
            raise InitializationError(path=str(all_dir.parent), reason=str(exc)) from exc

        self._all_stream = all_stream
        self._errors_stream = errors_stream
        self._state = SinkState.ACTIVE

    def _close_streams(self) -> None:
        streams = (self._all_stream, self._errors_stream)
        self._all_stream = None
        self._errors_stream = None
        self._state = SinkState.UNINITIALIZED
        self._rotation_pending = False
        for stream in streams:
            if stream is None:
                continue
            try:
                stream.close()
            except OSError:
                pass

    def _is_current_epoch(self, timestamp: str) -> bool:
        return self._all_stream is not None and self._all_stream.path.stem == timestamp

    def _rotate(self, now: datetime) -> None:
        self._close_streams()
        self._sweep(now)

    def _sweep(
        self,
        now: datetime,
        directories: Optional[tuple[Path, Path]] = None,
        protected: tuple[Path, ...] = (),
    ) -> None:
        if directories is None:
            logs_dir = self._settings.logs_dir
            directories = (logs_dir / ALL_DIR_NAME, logs_dir / ERRORS_DIR_NAME)
        self._last_sweep = self._policy.sweep(directories, now, protected=protected)

    def _mirror(self, level: LogLevel, line: str) -> None:
        if not self._settings.console:
            return
        try:
            self._console.emit(level.label, line)
        except Exception:
            pass  # Console output must never affect file writes


# =============================================================================
# Process-wide Facade
# =============================================================================

_default_sink: Optional[LogSink] = None
_default_sink_lock = threading.Lock()


def install_sink(sink: Optional[LogSink]) -> Optional[LogSink]:
    """Install the process-wide sink and return the previous one."""
    global _default_sink
    with _default_sink_lock:
        previous, _default_sink = _default_sink, sink
    return previous


def get_sink() -> LogSink:
    """Return the process-wide sink, creating it from settings on first use."""
    global _default_sink
    with _default_sink_lock:
        if _default_sink is None:
            _default_sink = LogSink(app_settings.sink)
        return _default_sink


def log(message: Any, *args: Any, **kwargs: Any) -> None:
    get_sink().log(message, *args, **kwargs)


def log_warning(message: Any, *args: Any, **kwargs: Any) -> None:
    get_sink().log_warning(message, *args, **kwargs)


def log_error(message: Any, *args: Any, **kwargs: Any) -> None:
    get_sink().log_error(message, *args, **kwargs)


def configure(settings: SinkSettings) -> None:
    get_sink().configure(settings)


def shutdown() -> None:
    with _default_sink_lock:
        sink = _default_sink
    if sink is not None:
        sink.shutdown()


# =============================================================================
# structlog Bridge
# =============================================================================

_METHOD_LEVELS = {
    "warn": LogLevel.WARNING,
    "warning": LogLevel.WARNING,
    "error": LogLevel.ERROR,
    "exception": LogLevel.ERROR,
    "critical": LogLevel.ERROR,
    "fatal": LogLevel.ERROR,
}


def level_for_method(method_name: str) -> LogLevel:
    """Map a structlog method name onto one of the three sink levels."""
    return _METHOD_LEVELS.get(method_name.lower(), LogLevel.DEFAULT)


def level_for_stdlib(levelno: int) -> LogLevel:
    if levelno >= logging.ERROR:
        return LogLevel.ERROR
    if levelno >= logging.WARNING:
        return LogLevel.WARNING
    return LogLevel.DEFAULT


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(_name=name or "root")


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name to log event."""
    event_dict["logger"] = event_dict.get("_name", "root")
    event_dict.pop("_name", None)
    return event_dict


class SinkRenderer:
    """Final structlog processor: writes the event through a LogSink.

    Returns an empty string so the wrapped logger prints nothing.
    """

    def __init__(self, sink: Optional[LogSink] = None):
        self._sink = sink

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
        sink = self._sink or get_sink()
        sink.write(level_for_method(method_name), render_event(event_dict))
        return ""


def _configure_structlog(sink: Optional[LogSink], level: str) -> None:
    shared_processors = [
        add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    # Logger factory that suppresses the (empty) rendered output
    class NopFile:
        def write(self, s: str) -> None:
            pass

        def flush(self) -> None:
            pass

    _NOP_FILE = NopFile()

    class SilentPrintLoggerFactory:
        """Logger factory that returns a logger writing to nowhere."""

        def __call__(self, *args: Any) -> structlog.PrintLogger:
            return structlog.PrintLogger(file=_NOP_FILE)

    structlog.configure(
        processors=shared_processors + [SinkRenderer(sink)],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper(), logging.INFO)),
        context_class=dict,
        logger_factory=SilentPrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging(
    sink: Optional[LogSink] = None,
    *,
    level: str | None = None,
    intercept_stdlib: bool = True,
    intercept: tuple[str, ...] = (),
) -> None:
    """
    Route structlog (and optionally stdlib logging) into a LogSink.

    Args:
        sink: Target sink (default: the process-wide sink, resolved per event)
        level: Minimum level (default: ``settings.sink.bridge_level``)
        intercept_stdlib: Replace root stdlib handlers with RedirectStdLibHandler
        intercept: Extra stdlib logger names whose own handlers are removed
    """
    from .interceptors import RedirectStdLibHandler, intercept_loggers

    level_name = level or (sink.settings if sink else app_settings.sink).bridge_level.value

    _configure_structlog(sink, level_name)

    if intercept_stdlib:
        root_logger = logging.getLogger()
        root_logger.handlers = []
        root_logger.setLevel(getattr(logging, level_name.upper(), logging.INFO))
        root_logger.addHandler(RedirectStdLibHandler(sink))
        intercept_loggers(intercept)
