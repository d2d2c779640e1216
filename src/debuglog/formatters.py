"""
Message formatting and color utilities.

Everything here is pure: turning caller input into the single line the sink
writes, and decorating that line for the console.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import orjson
from structlog.typing import EventDict

from .constants import LEVEL_WIDTH

# =============================================================================
# Value Rendering
# =============================================================================


def orjson_dumps(v: Any, *, default: Any = None) -> str:
    """Fast JSON serialization using orjson."""
    return orjson.dumps(v, default=default, option=orjson.OPT_NON_STR_KEYS).decode()


def render_value(value: Any) -> str:
    """Render an arbitrary value as message text.

    Strings pass through, containers become compact JSON, anything else uses str().
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (Mapping, list, tuple)):
        try:
            return orjson_dumps(value, default=str)
        except TypeError:
            return str(value)
    return str(value)


def single_line(text: str) -> str:
    """Escape line breaks so one message is always one line on disk."""
    if "\n" not in text and "\r" not in text:
        return text
    return text.replace("\r", "\\r").replace("\n", "\\n")


def format_message(message: Any, *args: Any, **kwargs: Any) -> str:
    """Build the message text from a preformatted value or a template.

    With positional or keyword arguments ``message`` is a ``str.format``
    template; otherwise it is rendered as-is. A template that does not match
    its arguments never raises: the raw template is written followed by the
    rendered arguments.

    Example:
        format_message("Value: {}", 42)  # "Value: 42"
        format_message({"a": 1})         # '{"a":1}'
        format_message("{0} {1}", 1)     # "{0} {1} 1"
    """
    if args or kwargs:
        try:
            text = str(message).format(*args, **kwargs)
        except (IndexError, KeyError, ValueError, AttributeError):
            text = _fallback_text(message, args, kwargs)
    else:
        text = render_value(message)
    return single_line(text)


def _fallback_text(message: Any, args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    parts = [str(message)]
    parts.extend(render_value(a) for a in args)
    parts.extend(f"{k}={render_value(v)}" for k, v in kwargs.items())
    return " ".join(parts)


def render_line(level_label: str, timestamp: str, message: str) -> str:
    """Render ``[<LEVEL padded to 8><timestamp>] <message>`` (no line break)."""
    return f"[{level_label:<{LEVEL_WIDTH}}{timestamp}] {message}"


# =============================================================================
# structlog Event Rendering
# =============================================================================

EXCLUDED_KEYS = {"level", "message", "event", "logger", "timestamp", "_name"}


def render_event(event_dict: EventDict) -> str:
    """Render a structlog event dict as ``<event> key=value ...``."""
    message = event_dict.get("message", event_dict.get("event", ""))
    parts = [render_value(message)]
    for k, v in event_dict.items():
        if k in EXCLUDED_KEYS:
            continue
        parts.append(f"{k}={render_value(v)}")
    logger_name = event_dict.get("logger")
    text = " ".join(p for p in parts if p)
    if logger_name and logger_name != "root":
        text = f"{logger_name}: {text}"
    return single_line(text)


# =============================================================================
# Console Colors
# =============================================================================

COLORS = {
    "reset": "\033[0m",
    "warning": "\033[33m",
    "error": "\033[31m",
}


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


class ConsoleFormatter:
    """Decorates a rendered line for the console.

    Default lines stay uncolored, warnings are yellow and errors red.
    """

    _LEVEL_COLORS = {
        "WARNING": "warning",
        "ERROR": "error",
    }

    @classmethod
    def format(cls, level_label: str, line: str, *, use_color: bool = True) -> str:
        if not use_color:
            return line
        color = cls._LEVEL_COLORS.get(level_label.upper())
        if not color:
            return line
        return colorize(line, color)
