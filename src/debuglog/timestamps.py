"""
Timestamp codec.

The same string is used in every line header and as the file name of each log
file, so retention can order files by parsing their names.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from .constants import TIMESTAMP_FORMAT, TIMESTAMP_PATTERN
from .exceptions import InvalidTimestampFormat

_TIMESTAMP_RE = re.compile(TIMESTAMP_PATTERN)


def to_local_naive(instant: datetime) -> datetime:
    """Aware datetimes are converted to local time; naive ones are taken as local."""
    if instant.tzinfo is not None:
        return instant.astimezone().replace(tzinfo=None)
    return instant


def format_timestamp(instant: datetime) -> str:
    """Render an instant as local wall time with one-second resolution."""
    return to_local_naive(instant).strftime(TIMESTAMP_FORMAT)


def parse_timestamp(text: str) -> datetime:
    """Parse a string produced by :func:`format_timestamp`.

    Returns a naive local datetime.

    Raises:
        InvalidTimestampFormat: if ``text`` is not exactly the fixed pattern.
    """
    # strptime alone accepts single-digit fields, which would break ordering
    if not isinstance(text, str) or not _TIMESTAMP_RE.fullmatch(text):
        raise InvalidTimestampFormat(value=str(text), expected=TIMESTAMP_FORMAT)
    try:
        return datetime.strptime(text, TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise InvalidTimestampFormat(value=text, expected=TIMESTAMP_FORMAT) from exc


def try_parse_timestamp(text: str) -> Optional[datetime]:
    """Like :func:`parse_timestamp` but returns ``None`` on malformed input."""
    try:
        return parse_timestamp(text)
    except InvalidTimestampFormat:
        return None
