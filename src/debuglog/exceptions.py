"""
debuglog exception hierarchy.

Errors are split by who handles them:
- InitializationError: surfaced to the caller, the host decides whether to abort.
- InvalidTimestampFormat: surfaced to the caller of the codec.

Malformed retention entries and best-effort I/O failures never become
exceptions; they are recovered where they happen.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class DebugLogError(Exception):
    """Root of all debuglog errors."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class InitializationError(DebugLogError):
    """Log directories or files could not be created or opened.

    Fatal to continued logging; the sink stays uninitialized and the next
    write retries from scratch.
    """

    def __init__(self, *, path: str, reason: str) -> None:
        super().__init__(
            f"Failed to open log files under '{path}': {reason}",
            code="INITIALIZATION_FAILED",
            details={"path": path, "reason": reason},
        )


class InvalidTimestampFormat(DebugLogError, ValueError):
    """A string does not match the fixed log timestamp pattern."""

    def __init__(self, *, value: str, expected: str) -> None:
        super().__init__(
            f"Invalid log timestamp {value!r}, expected format {expected!r}",
            code="INVALID_TIMESTAMP",
            details={"value": value, "expected": expected},
        )
