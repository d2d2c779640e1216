"""
Formatter unit tests.
"""

from __future__ import annotations

from debuglog.formatters import (
    COLORS,
    ConsoleFormatter,
    format_message,
    render_event,
    render_line,
)


class TestFormatMessage:
    def test_preformatted_string_passes_through(self) -> None:
        assert format_message("Message A") == "Message A"

    def test_template_with_positional_arguments(self) -> None:
        assert format_message("Value: {}", 42) == "Value: 42"

    def test_template_with_keyword_arguments(self) -> None:
        assert format_message("{name} took {ms:.1f}ms", name="sweep", ms=1.5) == "sweep took 1.5ms"

    def test_plain_values(self) -> None:
        assert format_message(42) == "42"
        assert format_message(None) == "None"

    def test_containers_render_as_compact_json(self) -> None:
        assert format_message({"job": 7, "ok": False}) == '{"job":7,"ok":false}'
        assert format_message([1, "a"]) == '[1,"a"]'

    def test_unserializable_members_fall_back_to_str(self) -> None:
        class Thing:
            def __str__(self) -> str:
                return "thing"

        assert format_message({"x": Thing()}) == '{"x":"thing"}'

    def test_line_breaks_are_escaped(self) -> None:
        result = format_message("first\nsecond\r\n")
        assert "\n" not in result
        assert "\r" not in result
        assert result == "first\\nsecond\\r\\n"

    def test_missing_positional_argument_falls_back(self) -> None:
        assert format_message("{0} {1}", 1) == "{0} {1} 1"

    def test_missing_keyword_argument_falls_back(self) -> None:
        assert format_message("{user} logged in", 7, host="db") == "{user} logged in 7 host=db"

    def test_bad_format_spec_falls_back(self) -> None:
        assert format_message("{:d}", "abc") == "{:d} abc"
        assert format_message("{", [1, 2]) == "{ [1,2]"


class TestRenderLine:
    def test_level_is_padded_to_eight(self) -> None:
        assert render_line("LOG", "2024-05-01_12-00-00", "hi") == "[LOG     2024-05-01_12-00-00] hi"

    def test_eight_character_level_touches_timestamp(self) -> None:
        assert render_line("WARNING", "2024-05-01_12-00-00", "w") == "[WARNING 2024-05-01_12-00-00] w"
        assert render_line("ERROR", "2024-05-01_12-00-00", "e") == "[ERROR   2024-05-01_12-00-00] e"


class TestRenderEvent:
    def test_event_with_extras_and_logger(self) -> None:
        text = render_event({"event": "disk_low", "logger": "app", "percent": 91, "level": "warning"})
        assert text == "app: disk_low percent=91"

    def test_root_logger_is_not_prefixed(self) -> None:
        assert render_event({"event": "ready", "logger": "root"}) == "ready"

    def test_multiline_exception_is_flattened(self) -> None:
        text = render_event({"event": "failed", "exception": "Traceback\n  line\nValueError"})
        assert "\n" not in text


class TestConsoleFormatter:
    def test_default_level_is_uncolored(self) -> None:
        assert ConsoleFormatter.format("LOG", "line", use_color=True) == "line"

    def test_warning_is_yellow_and_error_red(self) -> None:
        assert ConsoleFormatter.format("WARNING", "w", use_color=True) == f"{COLORS['warning']}w{COLORS['reset']}"
        assert ConsoleFormatter.format("ERROR", "e", use_color=True) == f"{COLORS['error']}e{COLORS['reset']}"
        assert COLORS["warning"] == "\033[33m"
        assert COLORS["error"] == "\033[31m"

    def test_color_disabled(self) -> None:
        assert ConsoleFormatter.format("ERROR", "e", use_color=False) == "e"
