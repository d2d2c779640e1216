import io
import typing as t
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from debuglog import LogSink, SinkSettings
from debuglog.sinks import ConsoleSink


class FakeClock:
    """Controllable clock; naive local datetimes like datetime.now()."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 5, 1, 12, 0, 0))


@pytest.fixture
def make_settings(tmp_path: Path) -> t.Callable[..., SinkSettings]:
    """Settings rooted in tmp_path with the console mirror off unless asked for."""

    def _make(**overrides: t.Any) -> SinkSettings:
        values: dict[str, t.Any] = {"root_path": tmp_path, "console": False}
        values.update(overrides)
        return SinkSettings(**values)

    return _make


@pytest.fixture
def console_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def make_sink(clock, console_stream, make_settings):
    """Factory for sinks that are shut down after the test."""
    created: list[LogSink] = []

    def _make(settings: SinkSettings | None = None, **kwargs: t.Any) -> LogSink:
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("console", ConsoleSink(stream=console_stream, use_color=False))
        sink = LogSink(settings or make_settings(), **kwargs)
        created.append(sink)
        return sink

    yield _make

    for sink in created:
        sink.shutdown()


@pytest.fixture
def sink(make_sink) -> LogSink:
    return make_sink()


def log_files(directory: Path) -> list[Path]:
    return sorted(p for p in directory.iterdir() if p.suffix == ".log")


def read_single(directory: Path) -> str:
    files = log_files(directory)
    assert len(files) == 1, files
    return files[0].read_text(encoding="utf-8")
