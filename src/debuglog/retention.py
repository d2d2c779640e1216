"""
Rotation and retention policy.

Rotation is decided from the sink's byte counters. Retention is a sweep over
one stream directory: file names are parsed back into timestamps, which gives
both the age check and the count ordering without any separate index.

Sweep order per directory:
1. Skip anything that is not a regular ``.log`` file with a parseable name.
2. Delete files older than ``delete_logs_after`` seconds.
3. Delete the oldest remaining files until at most ``max_log_files_amount`` are left.

Protected paths (the pair currently open) are never deleted but still count
towards the file limit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from pathlib import Path
from typing import Collection, Iterable, Optional

from .config import SinkSettings
from .constants import LOG_EXTENSION
from .timestamps import to_local_naive, try_parse_timestamp


def should_rotate(all_bytes: int, error_bytes: int, max_file_size: int) -> bool:
    """Check-after-write: rotate once either stream reached the threshold."""
    return all_bytes >= max_file_size or error_bytes >= max_file_size


@dataclass(frozen=True)
class SweepResult:
    """Outcome of one sweep. Diagnostics only; nothing here is logged."""

    directory: Path
    deleted: tuple[Path, ...] = ()
    kept: tuple[Path, ...] = ()
    skipped: tuple[Path, ...] = ()
    failed: tuple[Path, ...] = ()


@dataclass(order=True, frozen=True)
class _Candidate:
    timestamp: datetime
    name: str
    path: Path = field(compare=False)


def _scan(directory: Path) -> tuple[list[_Candidate], list[Path]]:
    candidates: list[_Candidate] = []
    skipped: list[Path] = []
    try:
        entries = list(directory.iterdir())
    except OSError:
        return candidates, skipped

    for entry in entries:
        try:
            if entry.suffix != LOG_EXTENSION or not entry.is_file():
                skipped.append(entry)
                continue
        except OSError:
            skipped.append(entry)
            continue
        parsed = try_parse_timestamp(entry.stem)
        if parsed is None:
            skipped.append(entry)
            continue
        candidates.append(_Candidate(timestamp=parsed, name=entry.name, path=entry))
    return candidates, skipped


def _unlink(path: Path) -> bool:
    try:
        path.unlink()
    except FileNotFoundError:
        return True
    except OSError:
        return False
    return True


def sweep_directory(
    directory: Path,
    *,
    now: datetime,
    max_files: int,
    max_age_seconds: int,
    protected: Collection[Path] = (),
) -> SweepResult:
    """Apply the age and count limits to one stream directory.

    Args:
        directory: Stream directory (``logs/all`` or ``logs/errors``)
        now: Naive local "now", comparable with parsed file names
        max_files: Files retained after the sweep (0 deletes all unprotected files)
        max_age_seconds: Files strictly older than this are deleted
        protected: Paths that are never deleted (the open pair); they count
            towards ``max_files`` like any other file

    Returns:
        SweepResult listing what was deleted, kept, skipped and failed
    """
    now = to_local_naive(now)
    candidates, skipped = _scan(directory)
    max_age = timedelta(seconds=max_age_seconds)
    protected_paths = set(protected)
    deleted: list[Path] = []
    failed: list[Path] = []

    survivors: list[_Candidate] = []
    for candidate in candidates:
        if candidate.path not in protected_paths and now - candidate.timestamp > max_age:
            (deleted if _unlink(candidate.path) else failed).append(candidate.path)
        else:
            survivors.append(candidate)

    # (timestamp, name) is a total order, so equal timestamps still sort deterministically
    survivors.sort()
    excess = max(len(survivors) - max_files, 0)
    evicted = [c for c in survivors if c.path not in protected_paths][:excess]
    for candidate in evicted:
        (deleted if _unlink(candidate.path) else failed).append(candidate.path)

    return SweepResult(
        directory=directory,
        deleted=tuple(deleted),
        kept=tuple(c.path for c in survivors if c not in evicted),
        skipped=tuple(skipped),
        failed=tuple(failed),
    )


class RetentionPolicy:
    """Binds the rotation threshold and retention limits of one settings epoch."""

    def __init__(self, settings: SinkSettings):
        self._settings = settings

    @property
    def settings(self) -> SinkSettings:
        return self._settings

    def should_rotate(self, all_bytes: int, error_bytes: int) -> bool:
        return should_rotate(all_bytes, error_bytes, self._settings.max_file_size)

    def sweep(
        self,
        directories: Iterable[Path],
        now: Optional[datetime] = None,
        protected: Collection[Path] = (),
    ) -> list[SweepResult]:
        """Sweep each directory independently."""
        now = now or datetime.now()
        return [
            sweep_directory(
                directory,
                now=now,
                max_files=self._settings.max_log_files_amount,
                max_age_seconds=self._settings.delete_logs_after,
                protected=protected,
            )
            for directory in directories
        ]
