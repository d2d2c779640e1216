"""
Process-wide facade tests.
"""

from __future__ import annotations

from pathlib import Path

import pytest

import debuglog
from conftest import read_single
from debuglog import LogSink


@pytest.fixture
def installed(make_sink):
    sink = make_sink()
    previous = debuglog.install_sink(sink)
    yield sink
    debuglog.install_sink(previous)


def test_module_functions_use_installed_sink(installed: LogSink, tmp_path: Path) -> None:
    assert debuglog.get_sink() is installed

    debuglog.log("plain {}", 1)
    debuglog.log_warning("warned")
    debuglog.log_error({"code": 500})

    all_content = read_single(tmp_path / "logs" / "all")
    errors_content = read_single(tmp_path / "logs" / "errors")
    assert "plain 1" in all_content
    assert "plain 1" not in errors_content
    assert "warned" in errors_content
    assert '{"code":500}' in errors_content


def test_configure_and_shutdown(installed: LogSink, make_settings, tmp_path: Path) -> None:
    debuglog.configure(make_settings(root_path=tmp_path / "next"))
    assert installed.is_initialized
    assert (tmp_path / "next" / "logs" / "all").is_dir()

    debuglog.shutdown()
    assert not installed.is_initialized


def test_get_sink_builds_default_lazily() -> None:
    previous = debuglog.install_sink(None)
    try:
        sink = debuglog.get_sink()
        assert isinstance(sink, LogSink)
        assert debuglog.get_sink() is sink
        assert sink.state is debuglog.SinkState.UNINITIALIZED
    finally:
        debuglog.install_sink(previous)


def test_shutdown_without_sink_is_noop() -> None:
    previous = debuglog.install_sink(None)
    try:
        debuglog.shutdown()
    finally:
        debuglog.install_sink(previous)
